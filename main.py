"""
SVF Export - Main Entry Point
"""
import argparse
import logging
import sys

from config.settings import settings


def setup_logging(level: str = None):
    """Configure root logging from settings"""
    handlers = [logging.StreamHandler()]
    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))

    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )


def parse_element_ids(value: str):
    try:
        return [int(v) for v in value.split(",") if v.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Element ids must be comma-separated integers: {value}")


ENGINE_ERROR_EXIT = 5


def build_session(args):
    """Create an export session; returns None if the engine cannot be loaded"""
    from svfzip import ExportSession
    from svfzip.export import load_engine
    from svfzip.storage import JsonSettingsGateway

    try:
        engine = load_engine(settings.engine)
    except (ImportError, AttributeError, ValueError, TypeError) as e:
        print(f"Cannot load export engine {settings.engine!r}: {e}", file=sys.stderr)
        return None

    return ExportSession(
        gateway=JsonSettingsGateway(settings.local_config_path()),
        engine=engine,
        view=getattr(args, "view", None),
        element_ids=getattr(args, "element_ids", None),
        export_type=getattr(args, "export_type", None) or settings.default_export_type,
        use_share_texture=getattr(args, "share_texture", False) or settings.use_share_texture,
        runtime_log_dir=settings.runtime_log_path(),
        default_extension=settings.default_extension,
        progress_callback=print,
    )


def run_features(args) -> int:
    """List the feature catalog with the last saved selection"""
    session = build_session(args)
    if session is None:
        return ENGINE_ERROR_EXIT
    for feature in session.features:
        mark = "x" if feature.selected else " "
        state = "" if feature.enabled else " (disabled)"
        print(f"[{mark}] {feature.type.value:<22} {feature.title}{state}")
        print(f"      {feature.description}")
    return 0


def run_export(args) -> int:
    """Run one export session"""
    from svfzip import ConfigError

    session = build_session(args)
    if session is None:
        return ENGINE_ERROR_EXIT
    for code in args.select:
        session.toggle(code, True)
    for code in args.deselect:
        session.toggle(code, False)

    try:
        outcome = session.export(args.target)
    except ConfigError as e:
        print(f"Invalid export configuration: {e}", file=sys.stderr)
        return 2

    return outcome.exit_code


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="SVF Export - Package a 3D view as a zip-compressed scene graph"
    )
    parser.add_argument("--log-level", help="Override the configured log level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("features", help="List export features")

    export_parser = subparsers.add_parser("export", help="Export a view")
    export_parser.add_argument(
        "target", nargs="?", default=None,
        help="Target .svfzip path (defaults to the last used path)",
    )
    export_parser.add_argument("--select", action="append", default=[], metavar="FEATURE", help="Select a feature")
    export_parser.add_argument("--deselect", action="append", default=[], metavar="FEATURE", help="Deselect a feature")
    export_parser.add_argument("--element-ids", type=parse_element_ids, help="Comma-separated element ids for OnlySelected")
    export_parser.add_argument("--export-type", choices=["zip", "folder"], help="Package variant")
    export_parser.add_argument("--share-texture", action="store_true", help="Share texture files between exports")
    export_parser.add_argument("--view", default="{3D}", help="Name of the 3D view to export")

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.command == "features":
        return run_features(args)
    elif args.command == "export":
        return run_export(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
