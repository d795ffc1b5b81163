# pagebuilder/api/v1/catalog.py
from flask import request, jsonify
from pagebuilder.application.catalog.sync_catalog import run_catalog_sync
from pagebuilder.models.template import Template
from pagebuilder.normalizers.template import normalize_template
from . import v1_bp


@v1_bp.route("/catalog/sync", methods=["POST"])
def sync_catalog():
    data = request.get_json(silent=True) or {}

    result = run_catalog_sync(root=data.get("root"))

    return jsonify(result), 200 if result["success"] else 500


@v1_bp.route("/catalog/templates", methods=["GET"])
def list_templates():
    templates = (
        Template.active()
        .order_by(Template.name.asc())
        .all()
    )

    return jsonify([normalize_template(t) for t in templates])
