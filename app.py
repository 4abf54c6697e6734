import json
import logging
import re

from flask import Flask, Response, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from loaders import SourceConfig
from models import get_engine, get_session_factory, init_db
from services import CacheStore, DataFetcher

logger = logging.getLogger(__name__)

PURGE_ACTION = 'purgeCache'
JSONP_MIMETYPE = 'application/javascript'
# Dotted JS identifier, e.g. "cb" or "window.app.onRows"
CALLBACK_PATTERN = re.compile(r'^[A-Za-z_$][\w$.]*$')


def error_payload(message):
    return {'success': False, 'error': message}


def create_app(config=None, engine=None):
    """
    Build the API app.

    Args:
        config: SourceConfig, a mapping of options, or None to read SHEET_API_* env vars
        engine: SQLAlchemy engine for the cache table (defaults to config.cache_db_url)
    """
    if config is None:
        config = SourceConfig.from_env()
    elif not isinstance(config, SourceConfig):
        config = SourceConfig.from_mapping(config)

    if engine is None:
        engine = get_engine(config.cache_db_url)
    try:
        init_db(engine)
    except SQLAlchemyError as e:
        # Reads still work uncached; CacheStore reports each failed call
        logger.warning("Cache table unavailable, serving uncached: %s", e)

    cache = CacheStore(get_session_factory(engine))
    fetcher = DataFetcher(config, cache)

    app = Flask(__name__)
    app.json.sort_keys = False
    app.config['SOURCE_CONFIG'] = config
    app.extensions['data_fetcher'] = fetcher

    def get_fetcher():
        return app.extensions['data_fetcher']

    @app.route('/', methods=['GET'])
    @app.route('/api/rows', methods=['GET'])
    def read_rows():
        callback = request.args.get('callback')
        if callback and not CALLBACK_PATTERN.match(callback):
            return jsonify(error_payload('Invalid callback'))

        try:
            payload = get_fetcher().fetch()
        except Exception as exc:
            logger.exception("read_rows failed")
            payload = error_payload(str(exc))

        if not callback:
            return jsonify(payload)
        body = f"{callback}({json.dumps(payload)})"
        return Response(body, mimetype=JSONP_MIMETYPE)

    @app.route('/', methods=['POST'])
    @app.route('/api/rows', methods=['POST'])
    def run_action():
        try:
            action = request.values.get('action')
            if action is None:
                body = request.get_json(silent=True)
                if isinstance(body, dict):
                    action = body.get('action')

            if action != PURGE_ACTION:
                return jsonify(error_payload('Unsupported action'))

            get_fetcher().invalidate()
            return jsonify({'success': True, 'message': 'Cache purged'})
        except Exception as exc:
            logger.exception("run_action failed")
            return jsonify(error_payload(str(exc)))

    @app.route('/healthz')
    def healthz():
        return jsonify({'success': True})

    return app


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    create_app().run(debug=True, port=5000)
