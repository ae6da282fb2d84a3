"""CLI entry point for quiz-synth.

Usage:
  python -m quiz_synth serve [--port PORT] [--host HOST]
  python -m quiz_synth generate FILE [--count N] [--difficulty LEVEL]
                                     [--types a,b,...] [--rule-based]
"""
from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "generate":
        _generate(args[1:])
    else:
        print(f"Unknown command: {command}")
        print("Commands: serve, generate")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str) -> str:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _serve(args: list[str]):
    import uvicorn

    port = int(_parse_flag(args, "--port", "8765"))
    host = _parse_flag(args, "--host", "127.0.0.1")

    print(f"Starting Quiz Synth on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")
    uvicorn.run(
        "quiz_synth.app:app",
        host=host,
        port=port,
        reload=False,
        timeout_graceful_shutdown=5,
    )


def _generate(args: list[str]):
    from quiz_synth.app import build_orchestrator, create_llm
    from quiz_synth.config import load_settings
    from quiz_synth.models import GenerationRequest

    if not args or args[0].startswith("--"):
        print("Usage: python -m quiz_synth generate FILE [--count N] [--difficulty LEVEL]")
        sys.exit(1)

    source = Path(args[0])
    if not source.exists():
        print(f"File not found: {source}")
        sys.exit(1)

    settings = load_settings()
    count = int(_parse_flag(args, "--count", str(settings.default_question_count)))
    difficulty = _parse_flag(args, "--difficulty", settings.default_difficulty)
    types_flag = _parse_flag(args, "--types", "")
    question_types = [t.strip() for t in types_flag.split(",") if t.strip()] or None

    try:
        request = GenerationRequest(
            text=source.read_text(),
            difficulty=difficulty,
            number_of_questions=count,
            question_types=question_types,
        )
    except ValueError as e:
        print(e)
        sys.exit(1)

    llm = None if "--rule-based" in args else create_llm(settings)
    if llm is None:
        print(f"Generating {count} questions (rule-based)...")
    else:
        print(f"Generating {count} questions using {llm.name()}...")

    orchestrator = build_orchestrator(settings, llm)
    result = asyncio.run(orchestrator.generate(request))

    print(json.dumps(result.to_dict(), indent=2))
    print(f"\n{result.questions.total} questions generated (method: {result.method})",
          file=sys.stderr)


if __name__ == "__main__":
    main()
