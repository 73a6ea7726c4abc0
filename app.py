# Flask and extensions
from flask import Flask, jsonify, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from werkzeug.exceptions import HTTPException

# Standard library
import argparse
import logging

# Application
from api.census_api import CensusAPI, CensusAPIError
from api.config import Config, load_config
from api.dashboard import fetch_dashboard
from api.preferences import JsonFilePreferenceStore, LanguagePreference, MemoryPreferenceStore

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(config: Config = None, census_api: CensusAPI = None,
               preference: LanguagePreference = None) -> Flask:
    """Build the Flask app; collaborators can be injected for tests"""
    config = config or load_config()
    census_api = census_api or CensusAPI(
        api_key=config.census_api_key,
        base_url=config.census_api_base_url,
        timeout=config.request_timeout
    )
    if preference is None:
        store = JsonFilePreferenceStore(config.language_file) if config.language_file else MemoryPreferenceStore()
        preference = LanguagePreference(store, default=config.default_language)

    app = Flask(__name__)
    app.config['CENSUS_CONFIG'] = config

    # Initialize CORS
    CORS(app)

    # Initialize rate limiter
    limiter = Limiter(
        get_remote_address,
        app=app,
        default_limits=["200 per day", "50 per hour"],
        storage_uri="memory://"
    )

    @app.before_request
    def log_request_info():
        logger.debug('Method: %s', request.method)
        logger.debug('Path: %s', request.path)
        logger.debug('Body: %s', request.get_data())

    @app.errorhandler(CensusAPIError)
    def census_api_error(error):
        logger.error('Census API error: %s', error)
        return jsonify({
            'error': 'Bad Gateway',
            'message': f"Census API request failed with status {error.status_code}",
            'status_code': 502
        }), 502

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({
            'error': 'Not Found',
            'message': str(error),
            'status_code': 404
        }), 404

    @app.errorhandler(Exception)
    def handle_exception(error):
        if isinstance(error, HTTPException):
            return jsonify({
                'error': error.name,
                'message': error.description,
                'status_code': error.code
            }), error.code
        logger.exception('Unhandled exception: %s', error)
        return jsonify({
            'error': 'Internal Server Error',
            'message': 'An unexpected error occurred',
            'status_code': 500
        }), 500

    def requested_language() -> str:
        lang = request.args.get('lang')
        return lang if lang in ('en', 'zh') else preference.get()

    @app.route('/healthz')
    @limiter.exempt
    def healthz():
        return jsonify({"status": "ok"})

    @app.route('/api/dashboard', methods=['GET'])
    @limiter.limit("30 per minute")
    def get_dashboard():
        """All dashboard datasets, or a single localized error"""
        result = fetch_dashboard(
            census_api,
            include_historical=config.include_historical,
            language=requested_language(),
            top_n=config.top_states
        )
        return jsonify(result.to_dict()), (200 if result.ok else 503)

    @app.route('/api/states', methods=['GET'])
    @limiter.limit("30 per minute")
    def get_states():
        records = census_api.get_all_states_data(top_n=config.top_states)
        return jsonify([record.to_dict() for record in records])

    @app.route('/api/age-distribution', methods=['GET'])
    @limiter.limit("30 per minute")
    def get_age_distribution():
        return jsonify([bucket.to_dict() for bucket in census_api.get_age_distribution()])

    @app.route('/api/race', methods=['GET'])
    @limiter.limit("30 per minute")
    def get_race():
        return jsonify([category.to_dict() for category in census_api.get_race_data()])

    @app.route('/api/history', methods=['GET'])
    def get_history():
        return jsonify([point.to_dict() for point in census_api.get_historical_population()])

    @app.route('/api/language', methods=['GET'])
    def get_language():
        return jsonify({"language": preference.get()})

    @app.route('/api/language', methods=['PUT'])
    def set_language():
        payload = request.get_json(silent=True) or {}
        try:
            language = preference.set(payload.get('language'))
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify({"language": language})

    @app.route('/api/language/toggle', methods=['POST'])
    def toggle_language():
        return jsonify({"language": preference.toggle()})

    return app


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Run the Census Dashboard data service')
    parser.add_argument('--port', type=int, default=5001, help='Port to run the application on (default: 5001)')
    parser.add_argument('--debug', action='store_true', help='Enable Flask debug mode and debug logging')
    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    create_app().run(host='0.0.0.0', port=args.port, debug=args.debug)
