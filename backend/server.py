import os
import sys
import time
import threading

# Ensure backend/ is on sys.path so sibling imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import pandas as pd
from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException
from dotenv import load_dotenv

from catalog import Catalog
from catalog_loader import CatalogSourceError, load_catalog
from normalizer import normalize_query
from settings import DEFAULT_CATALOG_PATH, env_flag, env_float, env_int, resolve_catalog_path

load_dotenv()

app = Flask(__name__)

# ── Paths ─────────────────────────────────────────────────────────────────────
CATALOG_PATH = resolve_catalog_path()
_catalog_lock = threading.Lock()
_catalog_mtime = None

_SLOW_REQUEST_LOG_MS = env_float("SLOW_REQUEST_LOG_MS", 750.0, minimum=0.0)


def _catalog_file_mtime(path: str):
    try:
        return os.path.getmtime(path)
    except OSError:
        return None


def _build_catalog(path: str) -> Catalog:
    """Load `path` into a fresh Catalog. Raises CatalogSourceError."""
    catalog = Catalog()
    report = load_catalog(catalog, path)
    for err in report.errors:
        print(f"[WARN] {path}: {err}", file=sys.stderr)
    return catalog


# ── Startup catalog load ───────────────────────────────────────────────────────
try:
    _catalog = _build_catalog(CATALOG_PATH)
    _catalog_mtime = _catalog_file_mtime(CATALOG_PATH)
    print(f"[OK] Loaded {len(_catalog)} courses from {CATALOG_PATH}")
except CatalogSourceError as exc:
    # A stale CATALOG_PATH falls back to the bundled catalog.
    if CATALOG_PATH != DEFAULT_CATALOG_PATH and os.path.exists(DEFAULT_CATALOG_PATH):
        print(
            f"[WARN] CATALOG_PATH not readable ({CATALOG_PATH}); "
            f"falling back to default catalog ({DEFAULT_CATALOG_PATH}).",
            file=sys.stderr,
        )
        CATALOG_PATH = DEFAULT_CATALOG_PATH
        _catalog = _build_catalog(CATALOG_PATH)
        _catalog_mtime = _catalog_file_mtime(CATALOG_PATH)
        print(f"[OK] Loaded {len(_catalog)} courses from {CATALOG_PATH}")
    else:
        print(f"[FATAL] {exc}", file=sys.stderr)
        sys.exit(1)


def _reload_catalog_if_changed(force: bool = False) -> bool:
    """
    Hot-reload the catalog when CATALOG_PATH changes on disk.

    A reload builds a fresh Catalog; the running one is swapped only after the
    new one loaded cleanly. Returns True when a reload occurred, else False.
    """
    global _catalog, _catalog_mtime

    candidate_mtime = _catalog_file_mtime(CATALOG_PATH)
    if not force:
        if candidate_mtime is None:
            return False
        if _catalog_mtime is not None and candidate_mtime <= _catalog_mtime:
            return False

    with _catalog_lock:
        latest_mtime = _catalog_file_mtime(CATALOG_PATH)
        if not force:
            if latest_mtime is None:
                return False
            if _catalog_mtime is not None and latest_mtime <= _catalog_mtime:
                return False

        try:
            new_catalog = _build_catalog(CATALOG_PATH)
        except CatalogSourceError as exc:
            print(f"[WARN] Catalog reload failed; keeping previous catalog: {exc}", file=sys.stderr)
            return False

        _catalog = new_catalog
        _catalog_mtime = latest_mtime if latest_mtime is not None else candidate_mtime
        print(f"[OK] Reloaded {len(new_catalog)} courses from {CATALOG_PATH}")
        return True


def _refresh_catalog_if_needed() -> None:
    try:
        _reload_catalog_if_changed()
    except Exception as exc:
        print(f"[WARN] Catalog reload check failed: {exc}", file=sys.stderr)


def _error_response(error_code: str, message: str, status: int):
    return jsonify({
        "mode": "error",
        "error": {
            "error_code": error_code,
            "message": message,
        },
    }), status


# -- Security headers ------------------------------------------------------
@app.before_request
def _start_request_timer():
    g._request_start_time = time.perf_counter()


@app.after_request
def _add_security_headers(response):
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["Referrer-Policy"] = "same-origin"

    started = getattr(g, "_request_start_time", None)
    if started is not None:
        duration_ms = (time.perf_counter() - started) * 1000.0
        if duration_ms >= _SLOW_REQUEST_LOG_MS:
            endpoint = request.endpoint or "unknown"
            print(
                f"[SLOW] {request.method} {request.path} "
                f"endpoint={endpoint} status={response.status_code} duration_ms={duration_ms:.1f}"
            )
    return response


# ── 500 handler ────────────────────────────────────────────────────────────────
@app.errorhandler(Exception)
def handle_unexpected_error(e):
    if isinstance(e, HTTPException):
        return e
    return _error_response("SERVER_ERROR", "An unexpected server error occurred.", 500)


# -- Health endpoint --------------------------------------------------------
@app.route("/health", methods=["GET"])
def health_endpoint():
    return jsonify({
        "status": "ok",
        "courses_loaded": len(_catalog),
    })


# ── Routes ─────────────────────────────────────────────────────────────────────
def get_courses():
    _refresh_catalog_if_needed()
    df = _catalog.to_frame()
    # Convert to object dtype so None survives instead of being re-coerced to NaN.
    df = df.astype(object).where(pd.notna(df), None)
    return jsonify({"courses": df.to_dict(orient="records")})


def get_course(course_number):
    _refresh_catalog_if_needed()
    number = normalize_query(course_number)
    course = _catalog.find(number) if number is not None else None
    if course is None:
        return _error_response(
            "COURSE_NOT_FOUND",
            f"Course '{course_number}' not found.",
            404,
        )
    return jsonify(course.to_dict())


app.add_url_rule("/api/health", endpoint="api_health", view_func=health_endpoint, methods=["GET"])
app.add_url_rule("/api/courses", endpoint="api_courses", view_func=get_courses, methods=["GET"])
app.add_url_rule(
    "/api/courses/<path:course_number>",
    endpoint="api_course",
    view_func=get_course,
    methods=["GET"],
)


# -- API catch-all (404 for unknown /api/* routes) -------------------
@app.route("/api/<path:rest>", methods=["GET", "POST", "PUT", "DELETE", "PATCH"])
def api_catch_all(rest):
    return jsonify({"error": f"/api/{rest} not found"}), 404


if __name__ == "__main__":
    port = env_int("PORT", 5000)
    debug = env_flag("FLASK_DEBUG", True)
    app.run(host="0.0.0.0", port=port, debug=debug)
