import logging
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_FUNCTION_TIMEOUT_SECONDS = 25
BACKGROUND_FUNCTIONS = ("process-analysis-job",)
REQUIRED_ENV_VARS = ("GEMINI_API_KEY", "MAPS_API_KEY", "FIREBASE_CLIENT_CONFIG")


def render_netlify_toml(
    timeout_seconds: int = DEFAULT_FUNCTION_TIMEOUT_SECONDS,
    background_functions: tuple[str, ...] = BACKGROUND_FUNCTIONS,
) -> str:
    lines = [
        "# Netlify configuration for timeouts and background functions",
        "",
        f"# Default timeout for all synchronous serverless functions ({timeout_seconds} seconds).",
        "[functions]",
        f"  timeout = {timeout_seconds}",
    ]
    for name in background_functions:
        lines.extend(
            [
                "",
                f"# '{name}' runs as a background function (up to 15 minutes).",
                f'[functions."{name}"]',
                "  background = true",
            ]
        )
    return "\n".join(lines)


def write_netlify_config(path: Path) -> Path:
    path = Path(path)
    path.write_text(render_netlify_toml(), encoding="utf-8")
    logger.info("netlify_config.written path=%s", path)
    return path


def missing_env_vars(environ: Mapping[str, str], required: tuple[str, ...] = REQUIRED_ENV_VARS) -> list[str]:
    return [name for name in required if not environ.get(name)]
