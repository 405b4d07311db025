import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait

from .errors import UnsupportedPlatformError, ValidationError
from .projector import project

logger = logging.getLogger(__name__)

MAX_WORKERS = 8


def parse_platform_requests(payload):
    """
    Validate a request body of the form
    {"platforms": [{"platform": ..., "username": ..., "features": [...]?}, ...]}
    and return the list of entries. Nothing is fetched here.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    platforms = payload.get("platforms")
    if not platforms:
        raise ValidationError("Platform data is required")
    if not isinstance(platforms, list):
        raise ValidationError("'platforms' must be a list")

    entries = []
    for i, item in enumerate(platforms):
        if not isinstance(item, dict):
            raise ValidationError(f"platforms[{i}] must be an object")
        platform, username = item.get("platform"), item.get("username")
        if not isinstance(platform, str) or not platform.strip():
            raise ValidationError(f"platforms[{i}].platform is required")
        if not isinstance(username, str) or not username.strip():
            raise ValidationError(f"platforms[{i}].username is required")

        features = item.get("features")
        if features is not None:
            if not isinstance(features, list) or not all(isinstance(f, str) for f in features):
                raise ValidationError(f"platforms[{i}].features must be a list of strings")

        entries.append({"platform": platform.strip(), "username": username.strip(), "features": features})
    return entries


def collect_stats(fetcher, entries):
    """
    Fetch every entry concurrently and project each result.

    All or nothing: the first failure cancels what hasn't started and is
    re-raised; no partial list is ever returned. Output order = input order.
    """
    if not entries:
        raise ValidationError("Platform data is required")

    for entry in entries:
        if not fetcher.supports(entry["platform"]):
            raise UnsupportedPlatformError(entry["platform"])

    workers = min(MAX_WORKERS, len(entries))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="stats-fetch") as pool:
        futures = [pool.submit(fetcher.fetch, e["platform"], e["username"]) for e in entries]
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)

        for f in pending:
            f.cancel()
        for f in futures:
            if f in done and f.exception() is not None:
                raise f.exception()

        results = [f.result() for f in futures]

    logger.info("Fetched stats for %d platform(s)", len(results))
    return [project(e["platform"], full, e["features"]) for e, full in zip(entries, results)]
