from __future__ import annotations
import os
from datetime import datetime, timezone

APP_NAME = "flashscope"
APP_VERSION = os.getenv("FLASHSCOPE_VERSION", "0.1.0")
GIT_SHA = os.getenv("GIT_SHA", "local")
BUILD_TIME_UTC = os.getenv("BUILD_TIME_UTC") or datetime.now(timezone.utc).isoformat()


def version_info() -> dict[str, str]:
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "git_sha": GIT_SHA,
        "build_time_utc": BUILD_TIME_UTC,
    }
