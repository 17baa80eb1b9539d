"""Command-line front-end: upload lecture PDFs and print the generated resume."""

import argparse
import logging
import sys
from pathlib import Path

import httpx

from app.intake.api_client import DEFAULT_API_URL, ApiError, ResumeApiClient
from app.intake.schema_editor import SchemaEditor
from app.intake.upload import IntakeError, SelectedFile, UploadIntake, UploadStatus
from app.models.summary import DEFAULT_LANGUAGE, LANGUAGES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lecture-resume",
        description="Extract text from lecture PDFs and generate a structured resume.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="PDF files to upload")
    parser.add_argument(
        "-s", "--subject", dest="subjects", action="append", default=[],
        help="Subject to focus on (repeatable)",
    )
    parser.add_argument("--source-language", choices=LANGUAGES, default=DEFAULT_LANGUAGE)
    parser.add_argument("--target-language", choices=LANGUAGES, default=DEFAULT_LANGUAGE)
    parser.add_argument("--api-url", default=DEFAULT_API_URL, help="Base URL of the API")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return parser


def main(argv: list[str] | None = None, api: ResumeApiClient | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    editor = SchemaEditor()
    for subject in args.subjects:
        editor.add_subject(subject)
    editor.set_language("source", args.source_language)
    editor.set_language("target", args.target_language)

    missing = [p for p in args.files if not p.is_file()]
    if missing:
        print(f"File not found: {', '.join(str(p) for p in missing)}", file=sys.stderr)
        return 2

    owns_client = api is None
    api = api or ResumeApiClient.connect(args.api_url)
    try:
        intake = UploadIntake(api)
        try:
            states = intake.add_files([SelectedFile.from_path(p) for p in args.files])
        except IntakeError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

        for state in states:
            if state.status is UploadStatus.SUCCESS:
                print(f"[ok]    {state.file.name}", file=sys.stderr)
            else:
                print(f"[error] {state.file.name}: {state.error}", file=sys.stderr)

        if not intake.extracted:
            print("Error: no text could be extracted", file=sys.stderr)
            return 1

        try:
            resume = intake.summarize(editor.schema)
        except (ApiError, IntakeError, httpx.HTTPError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    finally:
        if owns_client:
            api.close()

    print(resume)
    return 0


if __name__ == "__main__":
    sys.exit(main())
