# pagebuilder/api/v1/pages.py
from flask import request, jsonify
from pagebuilder.application.catalog.reconcile_page_sections import reconcile_page_sections
from pagebuilder.domain.exceptions import PageNotFound
from pagebuilder.domain.invariants.exceptions import InvariantViolation
from pagebuilder.models.page import Page
from pagebuilder.models.page_section import PageSection
from pagebuilder.normalizers.page import normalize_page
from pagebuilder.normalizers.section import normalize_page_section
from . import v1_bp


def _get_active_page(page_id):
    page = Page.active().filter_by(id=page_id).first()
    if page is None:
        raise PageNotFound(page_id)
    return page


@v1_bp.route("/pages/<page_id>", methods=["GET"])
def get_page(page_id):
    page = _get_active_page(page_id)

    return jsonify(normalize_page(page, include_sections=True))


@v1_bp.route("/pages/<page_id>/sections", methods=["GET"])
def list_page_sections(page_id):
    page = _get_active_page(page_id)

    sections = (
        PageSection.active()
        .filter_by(page_id=page.id)
        .order_by(PageSection.order.asc())
        .all()
    )

    return jsonify([normalize_page_section(s) for s in sections])


@v1_bp.route("/pages/<page_id>/sections", methods=["PUT"])
def update_page_sections(page_id):
    data = request.get_json(silent=True)

    if not isinstance(data, dict) or not isinstance(data.get("sections", []), list):
        raise InvariantViolation("Body must be an object with a 'sections' list.")

    sections = reconcile_page_sections(page_id=page_id, sections=data.get("sections"))

    return jsonify([normalize_page_section(s) for s in sections]), 200
