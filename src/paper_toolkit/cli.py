"""
Command-line access to the autosaved paper.

Usage:
    paper-toolkit show
    paper-toolkit search algebra
    paper-toolkit add-section "Section A" --instruction "Answer all questions"
    paper-toolkit duplicate-section sec-...
    paper-toolkit delete-section sec-... --yes
    paper-toolkit export ./out
    paper-toolkit import paper.json
    paper-toolkit clear --yes

Every command works on the document stored at --storage (default: the
application data directory), so changes are autosaved exactly as they
are for the desktop editor.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from paper_toolkit import __version__
from paper_toolkit.common.logging_utils import configure_logging
from paper_toolkit.core.models import Document, Question
from paper_toolkit.core.utils.numbering import sub_item_labels
from paper_toolkit.editor import (
    CommandError,
    ConfirmationGate,
    EditorConfig,
    ImportFormatError,
    PaperEditor,
    PendingAction,
    StorageError,
)


def _question_summary(question: Question) -> str:
    content = question.content
    text = getattr(content, "question_text", "") or getattr(content, "passage", "")
    if not text and question.items:
        text = question.items[0]
    return text or "(no text)"


def format_outline(document: Document) -> List[str]:
    """Render the document as indented text with running question numbers."""
    if not document.sections:
        return ["(empty paper)"]

    numbers = {n.question.id: n.number for n in document.numbered_questions()}
    lines = []
    for section in document.sections:
        lines.append(f"{section.title}  [{section.id}]  ({section.question_count} questions, {section.total_marks} marks)")
        if section.instruction:
            lines.append(f"  {section.instruction}")
        for group in section.groups:
            logic = f" ({group.logic.value})" if group.logic else ""
            lines.append(f"  {group.title}{logic}  [{group.id}]")
            if group.instruction:
                lines.append(f"    {group.instruction}")
            for question in group.questions:
                lines.append(
                    f"    {numbers[question.id]}. {_question_summary(question)}  "
                    f"[{question.total_marks} marks]"
                )
                labels = sub_item_labels(question, group.numbering_style)
                for label, item in zip(labels, question.items):
                    lines.append(f"       {label}) {item}")
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paper-toolkit",
        description="Inspect and edit the autosaved assessment paper",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--storage", type=Path, help="Storage file (default: app data directory)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("show", help="Print the paper outline")

    p = sub.add_parser("search", help="Print sections and groups matching a query")
    p.add_argument("query")

    p = sub.add_parser("export", help="Write the paper as JSON")
    p.add_argument("directory", nargs="?", type=Path, help="Destination directory")

    p = sub.add_parser("import", help="Replace the paper with a JSON file")
    p.add_argument("file", type=Path)

    p = sub.add_parser("add-section", help="Append a section")
    p.add_argument("title")
    p.add_argument("--instruction", default="")

    p = sub.add_parser("duplicate-section", help="Deep-copy a section")
    p.add_argument("section_id")

    p = sub.add_parser("delete-section", help="Delete a section and everything in it")
    p.add_argument("section_id")
    p.add_argument("--yes", action="store_true", help="Confirm the deletion")

    p = sub.add_parser("clear", help="Remove every section")
    p.add_argument("--yes", action="store_true", help="Confirm clearing the paper")

    return parser


def _confirmed(editor: PaperEditor, action: PendingAction, yes: bool) -> Optional[bool]:
    """Run a destructive action through the gate; None when not confirmed."""
    gate = ConfirmationGate(editor)
    gate.request_confirm(action)
    if not yes:
        gate.cancel()
        print(f"{action.message} Re-run with --yes to confirm.", file=sys.stderr)
        return None
    return gate.confirm()


def run(args: argparse.Namespace, editor: PaperEditor) -> int:
    """Execute a parsed command against an editor. Returns the exit code."""
    if args.command == "show":
        print("\n".join(format_outline(editor.document)))
        return 0

    if args.command == "search":
        print("\n".join(format_outline(editor.filtered(args.query))))
        return 0

    if args.command == "export":
        print(editor.export_to_file(args.directory))
        return 0

    if args.command == "import":
        document = editor.import_file(args.file)
        print(f"Imported {len(document)} section(s), {document.question_count} question(s)")
        return 0

    if args.command == "add-section":
        section = editor.add_section(args.title, args.instruction)
        print(section.id)
        return 0

    if args.command == "duplicate-section":
        clone = editor.duplicate_section(args.section_id)
        if clone is None:
            print(f"Section not found: {args.section_id}", file=sys.stderr)
            return 1
        print(clone.id)
        return 0

    if args.command == "delete-section":
        result = _confirmed(editor, PendingAction.delete_section(args.section_id), args.yes)
        if result is None:
            return 1
        if not result:
            print(f"Section not found: {args.section_id}", file=sys.stderr)
            return 1
        return 0

    if args.command == "clear":
        return 0 if _confirmed(editor, PendingAction.clear_document(), args.yes) else 1

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    config = EditorConfig(storage_path=args.storage) if args.storage else EditorConfig()
    editor = PaperEditor.from_config(config)

    try:
        return run(args, editor)
    except ImportFormatError as e:
        print(f"Import failed: {e.message}", file=sys.stderr)
        for error in e.errors:
            print(f"  - {error}", file=sys.stderr)
        return 1
    except (CommandError, StorageError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
