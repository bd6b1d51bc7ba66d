import argparse
import os
import sys

from dotenv import load_dotenv

from studio_core.config_manager import ConfigManager
from studio_core.errors import ValidationError
from studio_core.intelligence.analyst import ViralAnalyst
from studio_core.intelligence.client import build_llm_client
from studio_core.studio.controller import StudioController
from studio_core.studio.display import render_analysis, render_markdown
from studio_core.utils.logger import setup_logger


def read_transcript(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def run_analysis(controller: StudioController, transcript: str) -> bool:
    try:
        controller.request_analysis(transcript)
    except ValidationError as e:
        print(f"Error: {e}")
        return False

    state = controller.state
    if state.error:
        print(f"Error: {state.error}")
        return False

    print(render_markdown(render_analysis(state.analysis)))
    print()
    print("### AI 추천 주제")
    for idx, topic in enumerate(state.analysis.suggested_topics):
        print(f"{idx}. {topic}")
    return True


def main():
    parser = argparse.ArgumentParser(description="Viral Studio CLI")
    parser.add_argument("--config", default="config/settings.yaml", help="Path to settings.yaml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser("analyze", help="Extract the Viral DNA of a transcript")
    analyze_parser.add_argument("transcript", help="Transcript file ('-' for stdin)")

    remix_parser = subparsers.add_parser("remix", help="Analyze a transcript and write a script for a new topic")
    remix_parser.add_argument("transcript", help="Transcript file ('-' for stdin)")
    topic_group = remix_parser.add_mutually_exclusive_group(required=True)
    topic_group.add_argument("--topic", help="New video topic")
    topic_group.add_argument("--pick", type=int, help="Use the Nth suggested topic (0-based)")

    serve_parser = subparsers.add_parser("serve", help="Run the web studio")
    serve_parser.add_argument("--host", help="Bind address")
    serve_parser.add_argument("--port", type=int, help="Bind port")

    args = parser.parse_args()
    load_dotenv()

    try:
        config = ConfigManager(args.config)
    except Exception as e:
        print(f"Config Error: {e}")
        sys.exit(1)

    setup_logger(log_dir=config.paths.log_dir, cfg=config.logging)

    if args.command == "serve":
        os.environ["VIRAL_STUDIO_CONFIG"] = args.config
        from backend.server import serve

        serve(host=args.host, port=args.port)
        return

    analyst = ViralAnalyst(build_llm_client(config.intelligence), config.studio)
    controller = StudioController(analyst, config.studio)

    if not run_analysis(controller, read_transcript(args.transcript)):
        sys.exit(1)

    if args.command == "remix":
        if args.pick is not None:
            try:
                controller.select_topic(args.pick)
            except ValidationError as e:
                print(f"Error: {e}")
                sys.exit(1)
        else:
            controller.set_topic(args.topic)

        if controller.request_generation() is None:
            print(f"Error: {controller.state.error or '주제를 입력해주세요.'}")
            sys.exit(1)

        print()
        print(f"## 생성된 대본: {controller.state.topic}")
        print()
        print(controller.state.generated_script)


if __name__ == "__main__":
    main()
