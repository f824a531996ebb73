"""Main entrypoint."""

from kpi_monitor.interfaces.runners.cli import cli


def main() -> None:
    """Entrypoint."""
    cli(obj={})


if __name__ == "__main__":
    main()
