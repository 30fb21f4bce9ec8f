"""Command-line client: sign in, scan documents and manage the scan history."""

import argparse
import getpass
import sys
from collections.abc import Callable, Generator
from contextlib import contextmanager
from pathlib import Path

import psycopg
from psycopg_pool import PoolTimeout

from visionocr.auth.backend_auth_client import BackendAuthClient
from visionocr.auth.exceptions import AuthenticationError, NotSignedInError
from visionocr.auth.models import Session
from visionocr.auth.session_store import SessionStore
from visionocr.client.exceptions import ClientError
from visionocr.config.settings import Settings
from visionocr.database.connection import close_pool, init_pool
from visionocr.logging.logger import Log
from visionocr.ocr.models import OcrMode
from visionocr.processor.exceptions import ProcessorError
from visionocr.processor.history import build_history_service
from visionocr.processor.processor import build_processor

Command = Callable[[argparse.Namespace, Settings, SessionStore], int]

EXPORT_FALLBACK_NAME = "extracted_text.txt"


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def export_file_name(file_name: str) -> str:
    """Name of the text export: ``scan.v2.png`` becomes ``scan_ocr.txt``."""
    stem = file_name.split(".")[0]
    return f"{stem}_ocr.txt" if stem else EXPORT_FALLBACK_NAME


@contextmanager
def _database(settings: Settings) -> Generator[None, None, None]:
    init_pool(settings)
    try:
        yield
    finally:
        close_pool()


def _require_session(store: SessionStore) -> Session:
    session = store.load()
    if session is None:
        raise NotSignedInError("You must be logged in. Run 'visionocr login <email>' first.")
    return session


def cmd_login(args: argparse.Namespace, settings: Settings, store: SessionStore) -> int:
    password = args.password or getpass.getpass("Password: ")
    client = BackendAuthClient.for_client(settings)
    try:
        session = client.sign_in_with_password(args.email, password)
    finally:
        client.close()
    store.save(session)
    print(f"Signed in as {session.user.email or session.user.id}")
    return 0


def cmd_logout(args: argparse.Namespace, settings: Settings, store: SessionStore) -> int:
    store.clear()
    print("Signed out")
    return 0


def cmd_scan(args: argparse.Namespace, settings: Settings, store: SessionStore) -> int:
    session = _require_session(store)
    mode = OcrMode(args.mode) if args.mode else None
    with _database(settings):
        outcome = build_processor(settings, store).scan(session, Path(args.file), mode)
    print(outcome.result.extracted_text)
    print(
        f"\n-- {outcome.result.word_count} words, {outcome.result.character_count} characters, "
        f"{outcome.result.processing_time_ms} ms ({outcome.result.confidence_note})",
        file=sys.stderr,
    )
    print(f"-- saved as document {outcome.document.id}", file=sys.stderr)
    return 0


def cmd_history(args: argparse.Namespace, settings: Settings, store: SessionStore) -> int:
    session = _require_session(store)
    with _database(settings):
        items = build_history_service(settings).recent(session.user.id, args.limit)
    if not items:
        print("No documents yet")
        return 0
    for item in items:
        preview = " ".join(item.extracted_text.split())[:60]
        print(
            f"{item.id}  {item.processed_at:%Y-%m-%d %H:%M}  {item.status:<10}  "
            f"{item.file_name}  {preview}"
        )
    return 0


def cmd_show(args: argparse.Namespace, settings: Settings, store: SessionStore) -> int:
    session = _require_session(store)
    with _database(settings):
        detail = build_history_service(settings).get(session.user.id, args.document_id)
    document = detail.document
    print(f"{document.file_name} ({document.file_type}, {document.file_size} bytes) - {document.status}")
    if detail.result is None:
        return 0
    print(detail.result.extracted_text)
    if args.output:
        target = Path(args.output) / export_file_name(document.file_name)
        target.write_text(detail.result.extracted_text, encoding="utf-8")
        print(f"-- saved text to {target}", file=sys.stderr)
    return 0


def cmd_delete(args: argparse.Namespace, settings: Settings, store: SessionStore) -> int:
    session = _require_session(store)
    with _database(settings):
        build_history_service(settings).delete(session.user.id, args.document_id)
    print("Document removed from history")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="visionocr", description="Extract text from images and PDFs")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress to stdout")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="sign in with email and password")
    login.add_argument("email")
    login.add_argument("--password", help="prompted for when omitted")
    login.set_defaults(handler=cmd_login)

    logout = sub.add_parser("logout", help="forget the current session")
    logout.set_defaults(handler=cmd_logout)

    scan = sub.add_parser("scan", help="extract text from an image or PDF")
    scan.add_argument("file")
    scan.add_argument("--mode", choices=[m.value for m in OcrMode], help="guessed from the file name when omitted")
    scan.set_defaults(handler=cmd_scan)

    history = sub.add_parser("history", help="list recent documents")
    history.add_argument("--limit", type=positive_int, default=None)
    history.set_defaults(handler=cmd_history)

    show = sub.add_parser("show", help="print the text of a document")
    show.add_argument("document_id")
    show.add_argument("--output", help="directory to save the text as <name>_ocr.txt")
    show.set_defaults(handler=cmd_show)

    delete = sub.add_parser("delete", help="delete a document and its result")
    delete.add_argument("document_id")
    delete.set_defaults(handler=cmd_delete)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level if args.verbose else "WARNING")
    store = SessionStore(settings.session_file)
    handler: Command = args.handler
    try:
        return handler(args, settings, store)
    except (AuthenticationError, ClientError, ProcessorError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except (psycopg.Error, PoolTimeout) as exc:
        print(f"Error: database error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
