from flask import Blueprint, current_app, send_from_directory

from api.admin import get_hit_counter

bp = Blueprint("fileserver", __name__)


@bp.get("/")
@bp.get("/<path:filename>")
def serve(filename: str = ""):
    """
    Static files from FILESERVER_ROOT; every request counts as a visit.
    ---
    tags:
      - Files
    parameters:
      - in: path
        name: filename
        type: string
        required: false
    responses:
      200: { description: File contents }
      404: { description: Not found }
    """
    get_hit_counter().increment()
    return send_from_directory(current_app.config["FILESERVER_ROOT"], filename or "index.html")
