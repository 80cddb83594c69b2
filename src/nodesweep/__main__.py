"""Entry point for nodesweep CLI."""

from nodesweep.cli import app


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
