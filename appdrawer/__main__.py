"""Entry point for `python -m appdrawer`."""

import sys


def main():
    from appdrawer.app import run_app
    sys.exit(run_app())


if __name__ == "__main__":
    main()
