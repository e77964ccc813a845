"""
Command-Line Interface for naijavoice.

Runs the HTTP server or produces placeholder synthesis offline, without
going through HTTP.

Usage Examples:
    # Start the API server
    naijavoice serve --port 5000

    # List the voice catalog
    naijavoice voices

    # Offline placeholder synthesis
    naijavoice synthesize "Hello Lagos" --voice pidgin

    # Machine readable output
    naijavoice synthesize "Hello Lagos" --json

Exit codes:
    0  success
    2  validation failed (empty or too long text)

Environment Variables:
    NAIJAVOICE_SETTINGS: Path to settings.yaml
    NAIJAVOICE_HOST / NAIJAVOICE_PORT: Server bind overrides
    NAIJAVOICE_LOG_LEVEL: 1-4
"""

from __future__ import annotations

import argparse
import json
from typing import List, Optional
from uuid import uuid4

from naijavoice.core.config import ServiceConfig, load_settings
from naijavoice.core.logging import configure_logging, get_logger, info, set_request_id
from naijavoice.services.validators import ValidationError, validate_request
from naijavoice.tts.catalog import VoiceCatalog
from naijavoice.tts.engine import get_engine

EXIT_VALIDATION = 2


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="naijavoice", description="naijavoice CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve.add_argument("--host", help="Bind host (default from settings)")
    serve.add_argument("--port", type=int, help="Bind port (default from settings)")
    serve.add_argument("--reload", action="store_true", help="Auto-reload on code changes")

    voices = sub.add_parser("voices", help="List available voices")
    voices.add_argument("--json", action="store_true", help="Print JSON")

    synth = sub.add_parser("synthesize", help="Validate text and print placeholder audio")
    synth.add_argument("text", help="Text to synthesize")
    synth.add_argument("--voice", help="Voice id (default from settings)")
    synth.add_argument("--speed", type=float, default=1.0, help="Speed multiplier")
    synth.add_argument("--json", action="store_true", help="Print JSON")

    return parser.parse_args(argv)


def _serve(args: argparse.Namespace, cfg: ServiceConfig) -> int:
    import uvicorn

    host = args.host or cfg.server.host
    port = args.port or cfg.server.port
    uvicorn.run("naijavoice.main:app", host=host, port=port, reload=args.reload)
    return 0


def _voices(args: argparse.Namespace, cfg: ServiceConfig) -> int:
    catalog = VoiceCatalog.default(fallback_id=cfg.default_voice)
    items = [v.to_dict() for v in catalog.list_voices()]
    if args.json:
        print(json.dumps({"voices": items}, ensure_ascii=False))
        return 0
    for v in items:
        marker = "*" if v["id"] == cfg.default_voice else " "
        print(f"{marker} {v['id']:<15} {v['name']:<15} {v['description']}")
    return 0


def _synthesize(args: argparse.Namespace, cfg: ServiceConfig) -> int:
    # Offline: usage counters and the order book live in the server process only
    log = get_logger("naijavoice.cli")
    try:
        request = validate_request(
            args.text,
            args.voice,
            args.speed,
            max_length=cfg.validation.max_text_chars,
            contact_email=cfg.contact.email,
            default_voice=cfg.default_voice,
        )
    except ValidationError as e:
        if args.json:
            print(json.dumps(e.to_dict(), ensure_ascii=False))
        else:
            print(f"[FAILED] {e.message}")
        return EXIT_VALIDATION

    info(log, "cli_synthesize", chars=len(request.text), voice=request.voice)
    result = get_engine().synthesize(request.text, request.voice, request.speed)

    payload = {
        "ok": True,
        "voice": request.voice,
        "chars": len(request.text),
        "audioUrl": result.audio_url,
        "placeholder": result.placeholder,
    }
    if args.json:
        print(json.dumps(payload, ensure_ascii=False))
    else:
        print(result.audio_url)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Optional list of command-line arguments.

    Returns:
        Exit code (0 for success, 2 for validation failures).
    """
    args = _parse_args(argv)

    configure_logging()
    set_request_id(str(uuid4())[:12])

    cfg = ServiceConfig.from_settings(load_settings())

    if args.command == "serve":
        return _serve(args, cfg)
    if args.command == "voices":
        return _voices(args, cfg)
    return _synthesize(args, cfg)


if __name__ == "__main__":
    raise SystemExit(main())
