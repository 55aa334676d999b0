import logging

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required
from utils.decorators import current_actor
from utils.errors import error_response
from utils.services import (
    get_job_service,
    get_job_status_service,
    get_rating_aggregator,
    get_worker_service,
)

logger = logging.getLogger(__name__)
jobs_bp = Blueprint("jobs", __name__, url_prefix="/api/jobs")


@jobs_bp.route("", methods=["POST"])
@jwt_required()
def api_create_job():
    """Post a new job. Matching workers are notified before the response."""
    try:
        user_id, role = current_actor()
        data = request.get_json(silent=True) or {}
        job = get_job_service().create_job(poster_id=user_id, role=role, job_data=data)
        return jsonify({"message": "Job created successfully", "job": job}), 201
    except Exception as e:
        return error_response(e, "creating job")


@jobs_bp.route("/available", methods=["GET"])
@jwt_required()
def api_list_available_jobs():
    """All pending, unassigned jobs for workers, newest first."""
    try:
        _, role = current_actor()
        jobs = get_job_service().list_available_jobs(role=role)
        return jsonify({"jobs": jobs}), 200
    except Exception as e:
        return error_response(e, "fetching available jobs")


@jobs_bp.route("/categories", methods=["GET"])
def api_list_categories():
    try:
        categories = get_worker_service().list_categories()
        return jsonify({"categories": categories}), 200
    except Exception as e:
        return error_response(e, "fetching categories")


@jobs_bp.route("/my-posts", methods=["GET"])
@jwt_required()
def api_list_my_posts():
    try:
        user_id, _ = current_actor()
        jobs = get_job_service().list_my_posts(poster_id=user_id)
        return jsonify({"jobs": jobs}), 200
    except Exception as e:
        return error_response(e, "fetching posted jobs")


@jobs_bp.route("/my-assignments", methods=["GET"])
@jwt_required()
def api_list_my_assignments():
    try:
        user_id, role = current_actor()
        jobs = get_job_service().list_my_assignments(worker_user_id=user_id, role=role)
        return jsonify({"jobs": jobs}), 200
    except Exception as e:
        return error_response(e, "fetching assigned jobs")


@jobs_bp.route("/<int:job_id>", methods=["GET"])
@jwt_required()
def api_get_job(job_id: int):
    """Get job details API endpoint."""
    try:
        user_id, _ = current_actor()
        job = get_job_service().get_job(job_id, viewer_id=user_id)
        response = jsonify({"job": job})
        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate"
        return response, 200
    except Exception as e:
        return error_response(e, f"fetching job {job_id}")


@jobs_bp.route("/<int:job_id>/accept", methods=["POST"])
@jwt_required()
def api_accept_job(job_id: int):
    """Assign a pending job to the calling worker."""
    try:
        user_id, role = current_actor()
        job = get_job_service().accept_job(job_id=job_id, worker_user_id=user_id, role=role)
        return jsonify({"message": "Job accepted successfully", "job": job}), 200
    except Exception as e:
        return error_response(e, f"accepting job {job_id}")


@jobs_bp.route("/<int:job_id>/status", methods=["PUT"])
@jwt_required()
def api_update_job_status(job_id: int):
    """Update job status. Only the poster or the assigned worker may do this."""
    try:
        user_id, _ = current_actor()
        data = request.get_json(silent=True) or {}
        job = get_job_status_service().update_status(
            job_id=job_id, actor_id=user_id, new_status=data.get("status")
        )
        return jsonify({"message": "Job status updated successfully", "job": job}), 200
    except Exception as e:
        return error_response(e, f"updating status for job {job_id}")


@jobs_bp.route("/<int:job_id>/review", methods=["POST"])
@jwt_required()
def api_review_job(job_id: int):
    """Rate a completed job and refresh the worker's aggregate rating."""
    try:
        user_id, _ = current_actor()
        data = request.get_json(silent=True) or {}
        job = get_rating_aggregator().record_review(
            job_id=job_id,
            poster_id=user_id,
            rating=data.get("rating"),
            review=data.get("review"),
        )
        return jsonify({"message": "Review submitted successfully", "job": job}), 200
    except Exception as e:
        return error_response(e, f"reviewing job {job_id}")
