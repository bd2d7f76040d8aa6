# medocr/cli.py
import argparse
import sys
from pathlib import Path

from medocr.core.config import CONFIG
from medocr.core.logger import get_logger, set_level

log = get_logger("cli")


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    port = args.port or CONFIG.PORT
    log.info(f"API server on http://localhost:{port}")
    uvicorn.run("medocr.main:app", host=args.host or CONFIG.HOST, port=port, reload=args.reload)
    return 0


def cmd_clean(args: argparse.Namespace) -> int:
    from medocr.ocr.text_cleaner import clean_or_placeholder

    raw = Path(args.file).read_text(encoding="utf-8") if args.file else sys.stdin.read()
    print(clean_or_placeholder(raw))
    return 0


def cmd_explain(args: argparse.Namespace) -> int:
    from medocr.client.ocr_engine import CloudVisionEngine, TesseractEngine
    from medocr.client.relay_client import RelayClient
    from medocr.client.session import ClientSession
    from medocr.client.workflow import Phase

    path = Path(args.image)
    if not path.exists():
        log.error(f"File not found: {path}")
        return 1

    relay = RelayClient(args.relay)
    engine = CloudVisionEngine(relay) if args.cloud else TesseractEngine(args.lang)

    last = {"progress": -1}

    def on_state(state):
        if state.phase is Phase.OCR_RUNNING and state.progress != last["progress"]:
            last["progress"] = state.progress
            print(f"OCR {state.progress}%", file=sys.stderr)

    session = ClientSession(engine, relay, listener=on_state)
    session.select_file(path)

    state = session.run_ocr()
    if state.error:
        print(f"Error: {state.error}", file=sys.stderr)
        return 1
    print("=== OCR text ===")
    print(state.ocr_text)

    if args.no_summary:
        return 0

    state = session.summarize()
    if state.error:
        print(f"Error: {state.error}", file=sys.stderr)
        return 1
    print()
    print("=== Patient-friendly explanation ===")
    print(state.explanation)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="medocr", description="Prescription OCR + medication explainer.")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the relay API server.")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--reload", action="store_true")
    serve.set_defaults(func=cmd_serve)

    explain = sub.add_parser("explain", help="OCR an image, then ask the relay to explain it.")
    explain.add_argument("image", help="Prescription image (PNG/JPG/TIFF).")
    explain.add_argument("--relay", default=None, help="Relay base URL (default from MEDOCR_RELAY_URL).")
    explain.add_argument("--cloud", action="store_true", help="OCR through the relay's Cloud Vision endpoint.")
    explain.add_argument("--lang", default=None, help="Tesseract language (default eng).")
    explain.add_argument("--no-summary", action="store_true", help="Stop after OCR.")
    explain.set_defaults(func=cmd_explain)

    clean = sub.add_parser("clean", help="Clean raw OCR text from a file or stdin.")
    clean.add_argument("file", nargs="?", default=None)
    clean.set_defaults(func=cmd_clean)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.log_level:
        set_level(args.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
