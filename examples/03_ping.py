"""
Latency probe
"""
import asyncio
from accountpy import PingOperation


async def main():
    ping = PingOperation("https://api.example.com/health", timeout=2.0)
    ping.on_success(lambda ms: print(f"{ms:.1f} ms"))
    ping.on_failure(lambda _: print("no response"))
    await ping


if __name__ == "__main__":
    asyncio.run(main())
