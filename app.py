import io
import os
import time
from flask import Flask, jsonify, request, send_file, render_template_string

from cricket_ticker.config import SERVER_VERSION, LOG_FILE, POPULAR_TEAMS
from cricket_ticker.renderer import ConsoleRenderer, ImageRenderer, FanoutRenderer
from cricket_ticker.service import TickerService, EVENT_MESSAGES
from cricket_ticker.state import SettingsStore
from cricket_ticker.utils import Tee

PREVIEW_SCALE = 12

STATUS_PAGE = """
<html><body style='background:#111;color:#eee;font-family:sans-serif;padding:2rem'>
<h1>Cricket Ticker {{ version }}</h1>
<p>Status: {{ status }} | Last Updated: {{ last_updated or '-' }}</p>
<p>Mode: {{ display.mode }} | Match {{ display.match_index + 1 if display.match_count else 0 }} of {{ display.match_count }}</p>
<pre style='background:#1e1e1e;padding:1rem;border-radius:8px'>{{ display.text }}</pre>
<img src='/api/frame.png' style='image-rendering:pixelated;border:1px solid #333'>
<ul>
    <li><a style='color:#4dabf7' href='/api/state'>JSON state</a></li>
    <li><a style='color:#4dabf7' href='/api/config'>Settings</a></li>
</ul>
<script>setTimeout(()=>location.reload(), 5000)</script>
</body></html>
"""


def create_app(service, settings, preview=None):
    app = Flask(__name__)

    @app.route('/')
    def root():
        st = service.get_status()
        return render_template_string(STATUS_PAGE, version=SERVER_VERSION, status=st['status'],
                                      last_updated=st['last_updated'], display=st['display'])

    @app.route('/api/state')
    def api_state():
        st = service.get_status()
        return jsonify({
            'meta': {'version': SERVER_VERSION, 'status': st['status'], 'last_updated': st['last_updated'], 'time': time.time()},
            'display': st['display'],
            'settings': settings.as_dict(),
        })

    @app.route('/api/config', methods=['GET'])
    def api_config_get():
        return jsonify(settings.as_dict())

    @app.route('/api/config', methods=['POST'])
    def api_config():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"status": "error", "error": "expected a JSON object"}), 400
        if data.get('reset'):
            settings.reset_to_defaults()
        settings.update(data)
        service.settings_changed()
        return jsonify({"status": "ok", "settings": settings.as_dict()})

    @app.route('/api/teams', methods=['GET'])
    def api_teams():
        return jsonify({'popular': POPULAR_TEAMS, 'favorites': settings.get_favorite_teams()})

    @app.route('/api/teams', methods=['POST'])
    def api_teams_update():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"status": "error", "error": "expected a JSON object"}), 400
        if data.get('add'): settings.add_favorite_team(str(data['add']).strip())
        if data.get('remove'): settings.remove_favorite_team(str(data['remove']).strip())
        service.settings_changed()
        return jsonify({"status": "ok", 'favorites': settings.get_favorite_teams()})

    @app.route('/api/event', methods=['POST'])
    def api_event():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"status": "error", "error": "expected a JSON object"}), 400
        event = str(data.get('event', ''))
        if event not in EVENT_MESSAGES:
            return jsonify({"status": "error", "error": f"unknown event '{event}'", "events": sorted(EVENT_MESSAGES)}), 400
        service.handle_event(event)
        return jsonify({"status": "ok", "event": event})

    @app.route('/api/frame.png')
    def api_frame():
        if preview is None:
            return jsonify({"status": "error", "error": "no preview renderer"}), 404
        img = preview.snapshot()
        img = img.resize((img.width * PREVIEW_SCALE, img.height * PREVIEW_SCALE))
        buf = io.BytesIO()
        img.save(buf, format='PNG')
        buf.seek(0)
        return send_file(buf, mimetype='image/png')

    return app


if __name__ == "__main__":
    Tee(LOG_FILE, 'a').install()

    settings = SettingsStore()
    preview = ImageRenderer()
    service = TickerService(settings, renderer=FanoutRenderer(ConsoleRenderer(), preview))
    service.start()

    app = create_app(service, settings, preview)
    port = int(os.environ.get("PORT", 5000))
    print(f"Server online at http://0.0.0.0:{port}")
    try:
        app.run(host='0.0.0.0', port=port, debug=False)
    except KeyboardInterrupt:
        pass
    finally:
        service.shutdown()
