#!/usr/bin/env python3
"""
Command-line interface for pyjclass - Java class file constant pool reader.
"""

import argparse
import logging
import sys
from pathlib import Path


def _describe(descriptor: str) -> str:
    from .descriptor import parse_descriptor
    from .errors import DescriptorError

    try:
        return str(parse_descriptor(descriptor))
    except DescriptorError:
        return "<malformed descriptor>"


def format_class(cls) -> str:
    """Render a decoded class as indented text."""
    cp = cls.constant_pool
    lines = [
        f"magic: {cls.magic}",
        f"version: {cls.version}",
        "constant pool:",
    ]

    lines.append(f"  utf8s ({len(cp.utf8s)}):")
    for i, value in enumerate(cp.utf8s):
        lines.append(f"    #{i} {value!r}")

    lines.append(f"  classes ({len(cp.classes)}):")
    for i, entry in enumerate(cp.classes):
        lines.append(f"    #{i} utf8 #{entry.name_index} {cp.class_name(entry)}")

    lines.append(f"  strings ({len(cp.strings)}):")
    for i, entry in enumerate(cp.strings):
        lines.append(f"    #{i} utf8 #{entry.string_index} {cp.string_value(entry)!r}")

    lines.append(f"  name_and_types ({len(cp.name_and_types)}):")
    for i, entry in enumerate(cp.name_and_types):
        name, descriptor = cp.name_and_type(entry)
        lines.append(f"    #{i} {name}:{descriptor}  {_describe(descriptor)}")

    for label, refs in (("field_refs", cp.field_refs), ("method_refs", cp.method_refs)):
        lines.append(f"  {label} ({len(refs)}):")
        for i, ref in enumerate(refs):
            owner, name, descriptor = cp.member(ref)
            lines.append(f"    #{i} {owner}.{name}:{descriptor}")

    return "\n".join(lines)


def _print_class(cls, args):
    if args.json:
        print(cls.to_json())
    else:
        print(format_class(cls))


def dump_command(args):
    """Decode class files and print their constant pools."""
    from .classfile import read_class_file
    from .errors import ClassFileError

    for class_file in args.files:
        path = Path(class_file)
        if not path.exists():
            print(f"Error: File not found: {class_file}", file=sys.stderr)
            sys.exit(1)

        try:
            cls = read_class_file(path)
        except (ClassFileError, OSError) as e:
            print(f"Error reading {class_file}: {e}", file=sys.stderr)
            sys.exit(1)

        _print_class(cls, args)


def find_command(args):
    """Look a class up on a classpath and print its constant pool."""
    import os
    import zipfile
    from .classpath import ClassPath
    from .errors import ClassFileError

    with ClassPath() as classpath:
        try:
            for entry in args.classpath.split(os.pathsep):
                if entry:
                    classpath.add_path(entry)
        except (OSError, ValueError, zipfile.BadZipFile) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        try:
            cls = classpath.find_class(args.name)
        except (ClassFileError, OSError, zipfile.BadZipFile) as e:
            print(f"Error reading {args.name}: {e}", file=sys.stderr)
            sys.exit(1)

        if cls is None:
            print(f"Error: Class not found: {args.name}", file=sys.stderr)
            sys.exit(1)

        _print_class(cls, args)


def main(argv=None):
    """Main entry point for pyjclass CLI."""
    parser = argparse.ArgumentParser(
        prog="pyjclass",
        description="Decode the constant pool of Java class files",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Dump command
    dump_parser = subparsers.add_parser(
        "dump",
        help="Print the constant pool of .class files",
    )
    dump_parser.add_argument(
        "files",
        nargs="+",
        help="Class files to decode",
    )
    dump_parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of text",
    )
    dump_parser.set_defaults(func=dump_command)

    # Find command
    find_parser = subparsers.add_parser(
        "find",
        help="Find a class on a classpath and print its constant pool",
    )
    find_parser.add_argument(
        "name",
        help="Class name, e.g. java/lang/String or java.lang.String",
    )
    find_parser.add_argument(
        "-cp", "--classpath",
        required=True,
        help="Classpath entries (paths to .jar files or directories, os.pathsep-separated)",
    )
    find_parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of text",
    )
    find_parser.set_defaults(func=find_command)

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
