"""Initialize the Tubely database and optionally seed a video."""

from __future__ import annotations

import argparse
import sys

from tubely.auth.auth_service import AuthService
from tubely.config import load_config
from tubely.videos.videos_repository import VideoRepository


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create tables and seed a demo video.")
    parser.add_argument("--seed-user", help="Create a video owned by this user id and print a token.")
    parser.add_argument("--title", default="Demo video")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or [])
    config = load_config()
    print("Database initialized.")
    if not args.seed_user:
        return 0

    video = VideoRepository(config.session_factory).create_video(
        user_id=args.seed_user, title=args.title
    )
    token = AuthService(signing_key=config.jwt_secret).issue_token(args.seed_user)
    print(f"video_id={video.id}")
    print(f"token={token}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
