from __future__ import annotations
from flask import Flask, request, jsonify, Response

import logging
import time
from collections import deque, defaultdict

from premium_range.config.env import LOG_FORMAT, get_api_config, get_server_config
from premium_range.exports.display import render
from premium_range.exports.reports import assumptions_md, export_text
from premium_range.exports.writers import result_dict, write_results
from premium_range.scenario.engine import CalcResult, calculate
from premium_range.scenario.inputs import ValidationError, field_names

logger = logging.getLogger(__name__)

app = Flask(__name__)

# Configuration helpers (overridable via app.config in tests)

def _get_api_key() -> str | None:
    if 'API_KEY' in app.config:
        return app.config.get('API_KEY')
    return get_api_config().api_key


def _get_rate_limit() -> tuple[int, float]:
    n = app.config.get('RATE_LIMIT_N')
    w = app.config.get('RATE_LIMIT_WINDOW_SEC')
    if n is None or w is None:
        cfg = get_api_config()
        n = cfg.rate_limit_n if n is None else n
        w = cfg.rate_limit_window_sec if w is None else w
    return int(n), float(w)

_recent: dict[str, deque[float]] = defaultdict(lambda: deque(maxlen=1000))
# Sweep idle clients once this many are tracked
_MAX_TRACKED = 1024


def _sweep_idle(now: float, window: float) -> None:
    for ip in list(_recent):
        dq = _recent[ip]
        if not dq or now - dq[-1] > window:
            del _recent[ip]


def _client_ip() -> str:
    xff = request.headers.get('X-Forwarded-For')
    if xff:
        return xff.split(',')[0].strip()
    return request.remote_addr or 'anon'


def _check_api_key():
    api_key = _get_api_key()
    if api_key:
        provided = request.headers.get('X-API-Key')
        if provided != api_key:
            logger.warning("rejected %s %s: bad or missing API key", request.method, request.path)
            return jsonify({'error': 'unauthorized'}), 401
    return None


def _check_rate_limit(ip: str):
    # Allow if rate limiting disabled or N <= 0
    n, window = _get_rate_limit()
    if n <= 0:
        return None
    now = time.time()
    if len(_recent) >= _MAX_TRACKED:
        _sweep_idle(now, window)
    dq = _recent[ip]
    # Drop old entries outside window
    while dq and now - dq[0] > window:
        dq.popleft()
    if len(dq) >= n:
        retry = max(0.0, window - (now - dq[0]))
        logger.warning("rate limited %s (%d requests in %.2fs)", ip, len(dq), window)
        resp = jsonify({'error': 'rate_limited'})
        resp.status_code = 429
        resp.headers['Retry-After'] = f"{retry:.2f}"
        return resp
    dq.append(now)
    return None

@app.before_request
def _auth_and_rate_limit():
    # Only the calculation routes are guarded; GETs are static content
    if request.method == 'POST':
        unauthorized = _check_api_key()
        if unauthorized is not None:
            return unauthorized
        rl = _check_rate_limit(_client_ip())
        if rl is not None:
            return rl
    return None


def _calculate_from_request() -> CalcResult | ValidationError | None:
    payload = request.get_json(force=True, silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        return None
    raw = {name: payload.get(name) for name in field_names()}
    outcome = calculate(raw)
    if isinstance(outcome, ValidationError):
        logger.info("validation failed: %s (%s)", outcome.kind.value, outcome.field)
    return outcome


def _error_response(outcome: ValidationError | None):
    if outcome is None:
        return jsonify({'error': 'invalid_body', 'message': 'request body must be a JSON object'}), 400
    return jsonify({'error': outcome.kind.value, 'field': outcome.field, 'message': outcome.message}), 400


@app.post('/calculate')
def post_calculate():
    outcome = _calculate_from_request()
    if not isinstance(outcome, CalcResult):
        return _error_response(outcome)
    note = outcome.note
    return jsonify({
        'result': result_dict(outcome),
        'view': render(outcome).to_dict(),
        'note': {'kind': note.kind.value, 'text': note.text},
    })


@app.post('/export')
def post_export():
    fmt = request.args.get('format', 'text')
    if fmt not in ('text', 'csv'):
        return jsonify({'error': 'unsupported_format', 'message': f"unknown export format '{fmt}'"}), 400
    outcome = _calculate_from_request()
    if not isinstance(outcome, CalcResult):
        return _error_response(outcome)
    if fmt == 'csv':
        return Response(write_results([outcome]), mimetype='text/csv')
    return Response(export_text(outcome), mimetype='text/plain')


@app.get('/assumptions')
def get_assumptions():
    return Response(assumptions_md(), mimetype='text/markdown')


@app.get('/health')
def get_health():
    return jsonify({'status': 'ok'})


def main():
    cfg = get_server_config()
    logging.basicConfig(level=getattr(logging, cfg.log_level, logging.INFO), format=LOG_FORMAT)
    logger.info("serving on %s:%d", cfg.host, cfg.port)
    app.run(host=cfg.host, port=cfg.port)


if __name__ == '__main__':
    main()
