from ri_exporter.cli import cli


def main():
    """Entry point for the ri-exporter CLI. Delegates to ri_exporter.cli.app:cli."""
    cli(obj={})


if __name__ == "__main__":
    main()
