"""
Main entry point for ReClip preview.

Reads one clip from a file or stdin and prints its classification or
preview as JSON, e.g.:

    python -m src.main classify notes.md
    pbpaste | python -m src.main preview --compact --pretty
    python -m src.main check-files paths.json
    python -m src.main link https://example.com
"""

import argparse
import asyncio
import json
import sys
from typing import Any

from pydantic import TypeAdapter

from src.classifier.classifier import get_classifier
from src.classifier.kinds import CoarseType
from src.enrichment.paths import PathValidator
from src.enrichment.url_metadata import UrlMetadataClient
from src.preview.models import DisplayMode, PreviewModel, RawClip
from src.preview.nontext import apply_path_checks, files_preview
from src.preview.render import badge_label, render
from src.utils.config import get_settings
from src.utils.errors import PreviewError, PreviewErrorCode
from src.utils.logging import configure_logging, get_logger

_preview_adapter: TypeAdapter[Any] = TypeAdapter(PreviewModel)


def _read_clip(path: str | None) -> str:
    if path is None or path == "-":
        return sys.stdin.read()
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise PreviewError(
            PreviewErrorCode.INVALID_INPUT,
            f"Cannot read clip file: {path}",
            details={"error": str(e)},
        ) from e


def _emit(payload: dict[str, Any], pretty: bool) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2 if pretty else None))


def cmd_classify(args: argparse.Namespace) -> dict[str, Any]:
    content = _read_clip(args.file)
    result = get_classifier().classify(content, args.type)
    return {
        "ok": True,
        "kind": result.kind.value,
        "reason": result.reason,
        "signals": result.signals,
    }


def cmd_preview(args: argparse.Namespace) -> dict[str, Any]:
    clip = RawClip(content=_read_clip(args.file), coarse_type=args.type)
    mode = DisplayMode(compact=args.compact, show_raw=args.raw, expanded=args.expanded)
    preview = render(clip, mode)

    badge = None
    if clip.coarse_type == CoarseType.TEXT:
        badge = badge_label(get_classifier().classify(clip.content).kind, mode)

    return {
        "ok": True,
        "badge": badge,
        "preview": _preview_adapter.dump_python(preview, mode="json"),
    }


async def cmd_check_files(args: argparse.Namespace) -> dict[str, Any]:
    content = _read_clip(args.file)
    mode = DisplayMode(compact=args.compact)
    preview = files_preview(content, mode, get_settings().preview)

    checks = await PathValidator().validate(content)
    if checks is not None:
        preview = apply_path_checks(preview, checks)

    return {"ok": True, "preview": preview.model_dump(mode="json")}


async def cmd_link(args: argparse.Namespace) -> dict[str, Any]:
    client = UrlMetadataClient()
    try:
        card = await client.card(args.url)
    finally:
        await client.close()

    if card is None:
        return {"ok": False, "error_code": PreviewErrorCode.ENRICHMENT_UNAVAILABLE.value, "url": args.url}
    return {"ok": True, "card": card.model_dump(mode="json")}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ReClip - clipboard content classification and previews")
    parser.add_argument("--log-level", default=None, help="Log level (defaults to settings)")
    parser.add_argument("--pretty", action="store_true", help="Indent JSON output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_clip_args(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("file", nargs="?", default=None, help="Clip file (default: stdin)")
        sub.add_argument(
            "--type",
            choices=[t.value for t in CoarseType],
            default=CoarseType.TEXT.value,
            help="Capture-time clip type",
        )

    classify_parser = subparsers.add_parser("classify", help="Print the content kind")
    add_clip_args(classify_parser)

    preview_parser = subparsers.add_parser("preview", help="Print the preview model")
    add_clip_args(preview_parser)
    preview_parser.add_argument("--compact", action="store_true", help="Compact display budgets")
    preview_parser.add_argument("--raw", action="store_true", help="Raw text view")
    preview_parser.add_argument("--expanded", action="store_true", help="Expand expandable previews")

    files_parser = subparsers.add_parser("check-files", help="Validate the paths of a files clip")
    files_parser.add_argument("file", nargs="?", default=None, help="JSON path list (default: stdin)")
    files_parser.add_argument("--compact", action="store_true", help="Compact display budgets")

    link_parser = subparsers.add_parser("link", help="Fetch link preview metadata")
    link_parser.add_argument("url", help="http(s) URL")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(log_level=args.log_level)
    logger = get_logger(__name__)

    try:
        if args.command == "classify":
            payload = cmd_classify(args)
        elif args.command == "preview":
            payload = cmd_preview(args)
        elif args.command == "check-files":
            payload = asyncio.run(cmd_check_files(args))
        else:
            payload = asyncio.run(cmd_link(args))
    except PreviewError as e:
        logger.error("Command failed", command=args.command, error=e.message)
        _emit(e.to_dict(), args.pretty)
        return 2

    _emit(payload, args.pretty)
    return 0 if payload.get("ok") else 1


if __name__ == "__main__":
    sys.exit(main())
