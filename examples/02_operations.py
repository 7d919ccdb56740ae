"""
Event style - one-shot operation objects with success/failure handlers
"""
import asyncio
from accountpy import AccountClient, OperationResult


def show(result: OperationResult):
    print(f"{result.kind.value} ok: {result.user.name}")


def report(result: OperationResult):
    print(f"{result.kind.value} failed: {result.error.name} {result.message}")


async def main():
    async with AccountClient("https://api.example.com") as client:
        login = client.login_operation("alice", "secret")
        login.on_success(show).on_failure(report)
        await login.activate()
        
        # Awaiting an operation activates it and returns the terminal payload
        result = await client.authenticate_operation()
        print(f"auth finished with {result.error.name}")


if __name__ == "__main__":
    asyncio.run(main())
