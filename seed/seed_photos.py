#!/usr/bin/env python3
"""
Seed script to populate the gallery through the upload endpoint.

Run:
    python seed/seed_photos.py \
      --api-url https://<api-id>.execute-api.<region>.amazonaws.com/prod \
      --token <ADMIN_TOKEN> \
      --images-dir ./sample-photos \
      --category Landscape
"""

import argparse
import json
import mimetypes
import sys
from pathlib import Path
from typing import Any, cast

from aws_lambda_powertools import Logger
import requests

logger = Logger(service="seed")

IMAGE_SUFFIXES = (".jpg", ".jpeg", ".png", ".gif", ".webp")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed photos via the portfolio API")

    parser.add_argument(
        "--api-url",
        required=True,
        help="Base API URL (e.g. API Gateway stage URL)",
    )
    parser.add_argument(
        "--token",
        required=True,
        help="Admin bearer token",
    )
    parser.add_argument(
        "--images-dir",
        type=Path,
        default=Path(__file__).parent / "images",
        help="Directory of images to upload",
    )
    parser.add_argument(
        "--category",
        default=None,
        help="Category assigned to every seeded photo",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=20,
        help="Number of photos to seed",
    )

    return parser.parse_args(argv)


def find_images(directory: Path, limit: int) -> list[Path]:
    """Image files in ``directory``, sorted by name, at most ``limit``."""
    if not directory.is_dir():
        return []

    images = sorted(
        path for path in directory.iterdir()
        if path.is_file() and path.suffix.lower() in IMAGE_SUFFIXES
    )
    return images[:limit]


def build_meta(image_path: Path, category: str | None) -> dict[str, Any]:
    """Metadata for one seeded photo; the title is the file name without extension."""
    meta: dict[str, Any] = {"title": image_path.stem, "rating": 0, "exif": {}}
    if category:
        meta["category"] = category
    return meta


def upload_photo(
    session: requests.Session,
    upload_url: str,
    image_path: Path,
    *,
    category: str | None,
) -> requests.Response:
    content_type = mimetypes.guess_type(image_path.name)[0] or "application/octet-stream"

    with open(image_path, "rb") as f:
        return session.post(
            upload_url,
            data={"meta": json.dumps(build_meta(image_path, category), ensure_ascii=False)},
            files={"file": (image_path.name, f, content_type)},
            timeout=60,
        )


def seed_photos(argv: list[str] | None = None) -> int:
    """Upload every image found; return the number of failures."""
    args = parse_args(argv)

    base_url = args.api_url.rstrip("/")
    upload_url = f"{base_url}/upload"

    images = find_images(args.images_dir, args.limit)
    if not images:
        logger.warning("No images found", extra={"path": str(args.images_dir)})
        return 0

    session = requests.Session()
    session.headers["Authorization"] = f"Bearer {args.token}"

    logger.info(
        "Starting seeding process",
        extra={"upload_url": upload_url, "count": len(images)},
    )

    failures = 0
    for image_path in images:
        response = upload_photo(session, upload_url, image_path, category=args.category)

        if response.status_code == 201:
            response_json = cast(dict[str, Any], response.json())
            logger.info(
                "Seeded photo",
                extra={"image": image_path.name, "id": response_json.get("id")},
            )
        else:
            failures += 1
            logger.error(
                "Failed to seed photo",
                extra={
                    "image": image_path.name,
                    "status": response.status_code,
                    "response": response.text,
                },
            )

    list_response = session.get(f"{base_url}/photos", params={"page": 1, "pageSize": 10}, timeout=30)
    logger.info(
        "List photos response",
        extra={
            "status": list_response.status_code,
            "count": len(list_response.json().get("items", [])) if list_response.ok else None,
        },
    )

    logger.info("Seeding completed", extra={"failures": failures})
    return failures


def main() -> None:
    try:
        failures = seed_photos()
    except (requests.RequestException, OSError) as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)

    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
