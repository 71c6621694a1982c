"""Console entry point: market-list."""

import asyncio

from market_list.cli.app import MarketListApp


def main() -> None:
    app = MarketListApp()
    asyncio.run(app.run())


if __name__ == "__main__":
    main()
