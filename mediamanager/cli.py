import argparse
import logging
import sys
from pathlib import Path
from azure.core.exceptions import AzureError
from dotenv import load_dotenv

from mediamanager.adapters import adapter_for
from mediamanager.config import load_config
from mediamanager.exceptions import MediaManagerError
from mediamanager.formatting import format_bytes, format_timestamp

logger = logging.getLogger(__name__)

def configure_logging(log_file: str = "mediamanager.log"):
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.insert(0, logging.FileHandler(log_file))
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mediamanager", description="Browse and manage files on a configured disk.")
    parser.add_argument("--config", default="config.yaml", help="Path to config file. Defaults to config.yaml")
    parser.add_argument("--disk", help="Disk name from the config. Defaults to the configured default disk")
    parser.add_argument("--log-file", default="mediamanager.log", help="Log file, empty to log to stdout only")

    commands = parser.add_subparsers(dest="command", required=True)

    ls = commands.add_parser("ls", help="List a directory")
    ls.add_argument("path", nargs="?", default="/")
    ls.add_argument("--deep", action="store_true", help="Include sub-directories")

    for name in ("mv", "rename"):
        move = commands.add_parser(name, help="Move or rename a file or directory")
        move.add_argument("source")
        move.add_argument("destination")

    rm = commands.add_parser("rm", help="Delete files")
    rm.add_argument("paths", nargs="+")

    for name, help_text in (
        ("rmdir", "Delete a directory"),
        ("mkdir", "Create a directory"),
        ("url", "Print the public URL of a file"),
        ("thumb", "Print the thumbnail URL of an image"),
        ("info", "Show file metadata"),
        ("exists", "Check whether a path exists"),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument("path")

    return parser

def run(adapter, args) -> int:
    if args.command == "ls":
        for item in adapter.list(args.path, deep=args.deep):
            size = "-" if item.is_dir else format_bytes(item.size or 0)
            kind = "d" if item.is_dir else "f"
            print(f"{kind} {size:>12} {format_timestamp(item.last_modified):>19} {item.path}")
    elif args.command == "mv":
        print(adapter.move(args.source, args.destination))
    elif args.command == "rename":
        print(adapter.rename(args.source, args.destination))
    elif args.command == "rm":
        print(adapter.delete(args.paths))
    elif args.command == "rmdir":
        print(adapter.delete_directory(args.path))
    elif args.command == "mkdir":
        print(adapter.make_directory(args.path))
    elif args.command == "url":
        print(adapter.url(args.path))
    elif args.command == "thumb":
        print(adapter.image_thumbnail(args.path))
    elif args.command == "info":
        for entry in adapter.metadata(args.path).values():
            print(f"{entry['label']}: {entry['value']}")
    elif args.command == "exists":
        found = adapter.exists(args.path)
        print(found)
        return 0 if found else 1
    return 0

def main(argv=None) -> int:
    load_dotenv(dotenv_path=Path.cwd() / ".env")

    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}")
        return 1

    try:
        adapter = adapter_for(config, args.disk)
    except ValueError as e:
        print(f"Error initializing disk: {e}")
        return 1

    try:
        return run(adapter, args)
    except (MediaManagerError, OSError, AzureError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
