"""Entry point for the 'python -m studysync' command."""

from studysync.cli import main

if __name__ == "__main__":
    main()
