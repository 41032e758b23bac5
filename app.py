import logging

from flask import Flask, jsonify

from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from ptau_routes import ptau_bp, init_ptau_bp


DEFAULT_CONFIG = {
    "SECRET_KEY": "key",
    "PTAU_DB_PATH": "db.json",       # ":memory:" -> MemoryStorage
    "PTAU_VERIFY_WORKERS": 1,
    "PTAU_LOG_LEVEL": "INFO",
}


def open_db(path):
    if path == ":memory:":
        return TinyDB(storage=MemoryStorage)  # Memory DB
    return TinyDB(path)                       # Storage DB


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG)
    # FLASK_PTAU_DB_PATH, FLASK_PTAU_VERIFY_WORKERS, ...
    app.config.from_prefixed_env()
    if test_config is not None:
        app.config.update(test_config)

    level = app.config["PTAU_LOG_LEVEL"]
    app.logger.setLevel(level)
    logging.getLogger("ptau").setLevel(level)

    db = open_db(app.config["PTAU_DB_PATH"])
    app.extensions["ptau_db"] = db
    init_ptau_bp(db.table("ptau"))
    app.register_blueprint(ptau_bp)

    @app.route("/")
    def index():
        return jsonify({"service": "ptau-verifier", "endpoints": "/ptau/transcripts/<name>"})

    return app


if __name__ == "__main__":
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    create_app().run(debug=True)
