"""pomcli - manage pom.xml project descriptors from the command line.

    Returns:
        int: Exit code
"""
import sys

from args import parse_args


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)

    # Lazy imports keep --help free of the HTTP stack
    if args.action == "id":
        from cli_id import run_id_command  # pylint: disable=import-outside-toplevel
        run_id_command(args)
    elif args.action == "search":
        from cli_search import run_search_command  # pylint: disable=import-outside-toplevel
        run_search_command(args)
    else:
        sys.stderr.write(f"Unknown command: {args.action}\n")
        sys.exit(2)


if __name__ == "__main__":
    main()
