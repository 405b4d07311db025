import logging

from flask import Flask, Response, current_app, jsonify, request, url_for
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from profilestats.badge import render_badge
from profilestats.cache import SnapshotCache
from profilestats.config import Config
from profilestats.errors import CacheMissError, ProfileStatsError, ValidationError
from profilestats.fetcher import PlatformFetcher
from profilestats.markdown import records_to_platform_map, render_markdown
from profilestats.platforms import describe_all
from profilestats.service import collect_stats, parse_platform_requests

logger = logging.getLogger(__name__)


# =======================
#    HELPERS
# =======================

def _cache():
    return current_app.extensions["snapshot_cache"]


def _fetcher():
    return current_app.extensions["platform_fetcher"]


def _error(message, status, exc=None):
    body = {"error": message}
    if exc is not None: body["details"] = str(exc)
    return jsonify(body), status


def _gather(fail_message):
    """Validate the body and fetch everything, or return an error response."""
    try:
        entries = parse_platform_requests(request.get_json(silent=True))
        return collect_stats(_fetcher(), entries), None
    except ValidationError as e:
        return None, _error(str(e), 400)
    except ProfileStatsError as e:
        logger.exception(fail_message)
        return None, _error(fail_message, 500, e)


# =======================
#    APP FACTORY
# =======================

def create_app(config=None, fetcher=None, cache=None):
    config = config or Config()

    app = Flask(__name__)
    CORS(app)

    if cache is None:
        cache = SnapshotCache()
    app.extensions["profilestats_config"] = config
    app.extensions["snapshot_cache"] = cache
    app.extensions["platform_fetcher"] = fetcher if fetcher is not None else PlatformFetcher(config)

    if config.SWEEP_ENABLED:
        cache.start()

    @app.route('/')
    def home():
        return jsonify({
            "status": "Profile Stats API Online",
            "endpoints": {
                "platforms": "GET /platforms",
                "stats": "POST /generate-stats",
                "badge_create": "POST /generate-badge",
                "badge": "GET /badge/<key>",
            },
        })

    @app.route('/platforms')
    def platforms():
        return jsonify(describe_all())

    @app.route('/generate-stats', methods=['POST'])
    def generate_stats():
        records, err = _gather('Failed to fetch profile stats')
        if err: return err

        try:
            snippet = render_markdown(records_to_platform_map(records))
        except ProfileStatsError as e:
            logger.exception("Markdown render failed")
            return _error("Failed to fetch profile stats", 500, e)

        return jsonify({
            "stats": [r.to_dict() for r in records],
            "markdownSnippet": snippet,
        })

    @app.route('/generate-badge', methods=['POST'])
    def generate_badge():
        records, err = _gather('Failed to generate badge')
        if err: return err

        key = _cache().put(records)
        return jsonify({
            "badgeUrl": url_for('badge', key=key, _external=True),
            "statsKey": key,
        })

    @app.route('/badge/<key>')
    def badge(key):
        try:
            snapshot = _cache().require(key)
        except CacheMissError as e:
            return Response(str(e), status=404, mimetype="text/plain")

        svg = render_badge(snapshot.records)
        return Response(svg, mimetype="image/svg+xml", headers={"Cache-Control": "no-cache"})

    @app.errorhandler(Exception)
    def unhandled(e):
        if isinstance(e, HTTPException): return e
        logger.exception("Unhandled error")
        return Response("Something broke! Check the server logs.", status=500, mimetype="text/plain")

    return app


if __name__ == '__main__':
    config = Config()
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    create_app(config).run(host=config.HOST, port=config.PORT)
