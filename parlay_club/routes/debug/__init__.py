from flask import Blueprint

bp = Blueprint("debug", __name__)

from parlay_club.routes.debug import routes  # noqa: F401, E402
