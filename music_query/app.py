#!/usr/bin/env python3
"""
Music Query Assistant App
JSON endpoint over MusicQueryService for song information, story summaries and new verses.
"""
import argparse
import asyncio
import logging
import os
import time
import uuid
from typing import Optional

import mixpanel
from flask import Flask, jsonify, request

from . import constants
from .config import ServiceConfig
from .models import Language
from .service import MusicQueryService

# Set up logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# Initialize Mixpanel (optional)
mp = None
if os.environ.get("MIXPANEL_TOKEN"):
    mp = mixpanel.Mixpanel(os.environ["MIXPANEL_TOKEN"])

# Initialize Flask app
app = Flask(__name__)
app.json.ensure_ascii = False

EXAMPLE_QUERIES = {
    'hindi': ['"लग जा गले" जानकारी', '"तुम ही हो" कहानी', '"अभी न जाओ" की तरह बोल लिखें'],
    'english': ['"Lag ja gale" information', '"Tum hi ho" story', 'Write lyrics like "Abhi na jao"'],
}

music_service: Optional[MusicQueryService] = None


def init_music_service(config: Optional[ServiceConfig] = None) -> MusicQueryService:
    """Initialize the query service once, from the environment unless a config is given."""
    global music_service
    if music_service is None:
        music_service = MusicQueryService(config or ServiceConfig.from_env())
        logger.info("Initialized music query service")
    return music_service


def track_event(event_name, properties=None):
    """Send an analytics event when Mixpanel is configured."""
    if mp is None:
        return
    try:
        mp.track(str(uuid.uuid4()), event_name, properties or {})
    except Exception as e:
        logger.warning(f"Failed to track event '{event_name}': {e}")


@app.route('/api/query', methods=['POST'])
def query():
    """Answer a free-text music query."""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        data = {}
    query_text = data.get('query', '')
    if not isinstance(query_text, str) or not query_text.strip():
        return jsonify({'error': 'Please enter a song name or music query'}), 400

    style = data.get('style') if isinstance(data.get('style'), str) else None
    service = init_music_service()

    start_time = time.perf_counter()
    response = asyncio.run(service.handle_query(query_text, style=style))

    track_event('Query Handled', {
        'result_type': response.type.value,
        'success': response.success,
        'query_length': len(query_text),
        'duration_seconds': round(time.perf_counter() - start_time, 3),
    })
    return jsonify(response.model_dump(mode='json'))


@app.route('/api/examples', methods=['GET'])
def examples():
    """Example queries in the requested language (English by default)."""
    language = request.args.get('language', Language.ENGLISH.value)
    if language not in EXAMPLE_QUERIES:
        language = Language.ENGLISH.value
    return jsonify({'language': language, 'examples': EXAMPLE_QUERIES[language]})


@app.route('/api/config', methods=['GET'])
def get_config():
    """Current service configuration with credentials masked."""
    return jsonify(init_music_service().config.to_dict())


def parse_arguments():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Music Query Assistant: song information, story summaries and original verses',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m music_query.app
  python -m music_query.app --host 0.0.0.0 --port 8080
        """
    )
    parser.add_argument('--debug', action='store_true', help='Enable debug mode')
    parser.add_argument('--host', type=str, default=constants.DEFAULT_HOST, help='Host to run the server on (default: 127.0.0.1)')
    parser.add_argument('--port', type=int, default=constants.DEFAULT_PORT, help='Port to run the server on (default: 5000)')
    return parser.parse_args()


def main():
    args = parse_arguments()

    logger.info("Starting Music Query Assistant...")
    logger.info(f"Server will run on: http://{args.host}:{args.port}")
    logger.info(f"Debug mode: {'enabled' if args.debug else 'disabled'}")

    init_music_service()
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == '__main__':
    main()
