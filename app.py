import logging
import os

from dotenv import load_dotenv
from flask import Flask, redirect, url_for
from flask_migrate import Migrate

from database import db

load_dotenv()

DEFAULT_DATABASE_URI = "sqlite:///projectstracker.db"
DEFAULT_STORE_TIMEOUT_SECONDS = 30


def store_engine_options(database_uri: str, timeout: int) -> dict:
    """Return engine options bounding a single database round-trip to ``timeout`` seconds."""
    options = {"pool_pre_ping": True}
    if database_uri.startswith("sqlite"):
        options["connect_args"] = {"timeout": timeout}
    else:
        options["pool_timeout"] = timeout
        options["connect_args"] = {"connect_timeout": timeout}
        if database_uri.startswith("postgresql"):
            # statement_timeout is in milliseconds
            options["connect_args"]["options"] = f"-c statement_timeout={timeout * 1000}"
    return options


# Initialize Flask app
app = Flask(__name__)
app.config["SQLALCHEMY_DATABASE_URI"] = os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URI)
app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY", "dev-secret-key")
app.config["STORE_TIMEOUT_SECONDS"] = int(
    os.environ.get("STORE_TIMEOUT_SECONDS", DEFAULT_STORE_TIMEOUT_SECONDS)
)
app.config["SQLALCHEMY_ENGINE_OPTIONS"] = store_engine_options(
    app.config["SQLALCHEMY_DATABASE_URI"], app.config["STORE_TIMEOUT_SECONDS"]
)

log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
app.logger.setLevel(log_level)

db.init_app(app)

# Models import should be after initializing db
from models.client import Client  # noqa: E402,F401
from models.project import Project  # noqa: E402,F401
from models.task import Task  # noqa: E402,F401
from models.team_member import TeamMember  # noqa: E402,F401
from models.todo import Todo  # noqa: E402,F401

from routes.clients import clients_bp  # noqa: E402
from routes.dashboard import dashboard_bp  # noqa: E402
from routes.projects import projects_bp  # noqa: E402
from routes.tasks import tasks_bp  # noqa: E402
from routes.team_members import team_members_bp  # noqa: E402
from routes.todos import todos_bp  # noqa: E402

# Create flask command lines to update the db based on the model
# Useage:
# Create a migration script in ./migrations/versions
# > flask db migrate -m "Update comments"
# Run the update
# > flask db upgrade
migrate = Migrate(app, db)
app.register_blueprint(clients_bp)
app.register_blueprint(projects_bp)
app.register_blueprint(tasks_bp)
app.register_blueprint(todos_bp)
app.register_blueprint(team_members_bp)
app.register_blueprint(dashboard_bp)


# Home
# ------------------------------
@app.route("/")
def home():
    return redirect(url_for("dashboard.summary"))


# Application Execution
# ------------------------------
if __name__ == "__main__":
    app.run(debug=True)
