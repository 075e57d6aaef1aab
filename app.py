import os
import logging
from flask import Flask, render_template, jsonify, request, current_app
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

import scraper
from models import ScoreQuery, ValidationError

logger = logging.getLogger(__name__)

SECURE_HEADERS = {
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'DENY',
    'Referrer-Policy': 'no-referrer',
    'X-XSS-Protection': '0',
    'Strict-Transport-Security': 'max-age=31536000; includeSubDomains',
}


def _env_number(name, cast, default):
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return cast(value)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={value!r}, using {default!r}")
        return default


def load_config(overrides=None):
    config = {
        'PORT': _env_number('PORT', int, 6020),
        'SCOREBOARD_BASE_URL': os.environ.get('SCOREBOARD_BASE_URL', scraper.BASE_URL),
        'SCRAPER_TIMEOUT': _env_number('SCRAPER_TIMEOUT', float, None),
        'CORS_ORIGINS': os.environ.get('CORS_ORIGINS', '*'),
        'DEBUG': os.environ.get('FLASK_DEBUG', 'False').lower() == 'true',
    }
    if overrides:
        config.update(overrides)
    return config


def set_secure_headers(response):
    for name, value in SECURE_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


def index():
    return render_template('index.html')


def get_score():
    try:
        query = ScoreQuery.from_args(request.args)
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400

    result = scraper.scrape_score(
        query.id,
        base_url=current_app.config['SCOREBOARD_BASE_URL'],
        timeout=current_app.config['SCRAPER_TIMEOUT'],
    )
    return jsonify(result.to_dict())


def register_routes(app):
    app.add_url_rule('/', 'index', index, methods=['GET'])
    app.add_url_rule('/score', 'score', get_score, methods=['GET'])


def register_error_handlers(app):
    @app.errorhandler(404)
    def not_found(e):
        return jsonify({'error': 'Resource not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({'error': 'Resource not found'}), 404

    @app.errorhandler(scraper.FetchFailure)
    def fetch_failed(e):
        return jsonify({'error': e.message}), 502

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({'error': e.description}), e.code

    @app.errorhandler(Exception)
    def unhandled_error(e):
        logger.exception(f"Unhandled error on {request.path}")
        return jsonify({'error': 'Internal Server Error'}), 500


def create_app(config=None):
    app = Flask(__name__)
    app.config.update(load_config(config))

    logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'INFO').upper())

    CORS(app, origins=app.config['CORS_ORIGINS'])
    app.after_request(set_secure_headers)

    register_routes(app)
    register_error_handlers(app)
    return app


if __name__ == '__main__':
    app = create_app()
    port = app.config['PORT']
    logger.info(f"Server running on PORT: {port}")
    app.run(host='0.0.0.0', port=port, debug=app.config['DEBUG'])
