# mcapi/routes/web.py
# Index page with usage docs for the API

import os

from flask import Blueprint, render_template, current_app

web_bp = Blueprint("web", __name__)


@web_bp.get("/")
def index():
    return render_template(os.path.basename(current_app.config["TEMPLATE_FILE"]))
