"""API routes for country records."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request

from services.country_service import CountryService


countries_bp = Blueprint("countries", __name__)


def _service() -> CountryService:
    return current_app.extensions["country_service"]


def _json_body() -> Dict[str, Any]:
    """Return the request body as a dict; anything else counts as empty."""
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


@countries_bp.route("/submit", methods=["POST"])
def submit_country():
    _service().create_country(_json_body())
    return jsonify({"status": "ok", "message": "Data inserted successfully"}), 200


@countries_bp.route("/countries", methods=["GET"])
def list_countries():
    countries = _service().list_countries()
    return jsonify([country.model_dump() for country in countries]), 200


@countries_bp.route("/countries/<country>", methods=["GET"])
def get_country(country: str):
    return jsonify(_service().get_country(country).model_dump()), 200


@countries_bp.route("/countries/<country>", methods=["DELETE"])
def delete_country(country: str):
    _service().delete_country(country)
    return jsonify({"status": "ok", "message": "Country deleted successfully"}), 200


@countries_bp.route("/countries/<country>", methods=["PUT"])
def update_country(country: str):
    _service().update_country(country, _json_body())
    return jsonify({"status": "ok", "message": "Country updated successfully"}), 200
