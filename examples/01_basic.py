"""
Basic usage - Register, login and authenticate
"""
import asyncio
from accountpy import AccountClient, ErrorKind


async def main():
    async with AccountClient("https://api.example.com") as client:
        client.on_token_changed(lambda: print(f"Token is now: {client.token[:8] or '<none>'}"))
        
        result = await client.register("alice", "secret")
        if result.error is ErrorKind.USERNAME_EXISTS:
            print("alice already exists, logging in")
        elif not result.succeeded:
            print(f"Register failed: {result.error.name}")
            return
        
        result = await client.login("alice", "secret")
        print(f"Login: {result.error.name} user={result.user}")
        
        me = await client.authenticate()
        print(f"Authenticated as {me.user.name} (id {me.user.id})")
        
        client.logout()


if __name__ == "__main__":
    asyncio.run(main())
