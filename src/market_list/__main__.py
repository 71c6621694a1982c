"""Entry point: python -m market_list"""

from market_list.cli.main import main

if __name__ == "__main__":
    main()
