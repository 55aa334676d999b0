import logging

from flask import Blueprint, jsonify, request
from utils.decorators import current_actor, worker_required
from utils.errors import error_response
from utils.services import (
    get_location_disclosure_service,
    get_worker_notification_service,
    get_worker_service,
)

logger = logging.getLogger(__name__)
worker_bp = Blueprint("worker", __name__, url_prefix="/api/worker")


@worker_bp.after_request
def add_unread_notifications_header(response):
    """Expose the unread count on successful worker responses."""
    if response.status_code >= 400:
        return response
    try:
        user_id, _ = current_actor()
        count = get_worker_notification_service().unread_count(user_id)
        response.headers["X-Unread-Notifications"] = str(count)
    except Exception as e:
        logger.warning(f"Could not attach unread notification count: {e}")
    return response


@worker_bp.route("/notifications", methods=["GET"])
@worker_required
def api_list_notifications():
    try:
        user_id, _ = current_actor()
        result = get_worker_notification_service().list_notifications(user_id)
        return jsonify(result), 200
    except Exception as e:
        return error_response(e, "fetching notifications")


@worker_bp.route("/notifications/<notification_id>", methods=["PATCH"])
@worker_required
def api_mark_notification_read(notification_id: str):
    try:
        user_id, _ = current_actor()
        get_worker_notification_service().mark_as_read(user_id, notification_id)
        return jsonify({"message": "Notification marked as read"}), 200
    except Exception as e:
        return error_response(e, f"marking notification {notification_id} as read")


@worker_bp.route("/push-subscription", methods=["POST"])
@worker_required
def api_save_push_subscription():
    try:
        user_id, _ = current_actor()
        data = request.get_json(silent=True) or {}
        get_worker_service().save_push_subscription(user_id, data.get("subscription"))
        return jsonify({"message": "Push subscription saved successfully"}), 200
    except Exception as e:
        return error_response(e, "saving push subscription")


@worker_bp.route("/job-location/<int:job_id>", methods=["GET"])
@worker_required
def api_get_job_location(job_id: int):
    """Exact job location, revealed 3 hours before the job starts."""
    try:
        user_id, _ = current_actor()
        result = get_location_disclosure_service().check_disclosure(job_id, user_id)
        return jsonify(result.to_dict()), 200
    except Exception as e:
        return error_response(e, f"fetching location for job {job_id}")


@worker_bp.route("/ensure-profile", methods=["POST"])
@worker_required
def api_ensure_profile():
    try:
        user_id, _ = current_actor()
        data = request.get_json(silent=True) or {}
        worker = get_worker_service().ensure_profile(
            user_id,
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            skills=data.get("skills"),
            city=data.get("city"),
        )
        return jsonify({"worker": worker}), 200
    except Exception as e:
        return error_response(e, "ensuring worker profile")


@worker_bp.route("/profile", methods=["GET"])
@worker_required
def api_get_profile():
    try:
        user_id, _ = current_actor()
        worker = get_worker_service().get_profile(user_id)
        return jsonify({"worker": worker}), 200
    except Exception as e:
        return error_response(e, "fetching worker profile")


@worker_bp.route("/profile", methods=["PUT"])
@worker_required
def api_update_profile():
    try:
        user_id, _ = current_actor()
        data = request.get_json(silent=True) or {}
        worker = get_worker_service().update_profile(
            user_id,
            skills=data.get("skills"),
            service_radius=data.get("service_radius"),
            city=data.get("city"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )
        return jsonify({"message": "Profile updated successfully", "worker": worker}), 200
    except Exception as e:
        return error_response(e, "updating worker profile")


@worker_bp.route("/update-location", methods=["PUT"])
@worker_required
def api_update_location():
    try:
        user_id, _ = current_actor()
        data = request.get_json(silent=True) or {}
        worker = get_worker_service().update_location(
            user_id, data.get("latitude"), data.get("longitude")
        )
        return jsonify({"message": "Location updated successfully", "worker": worker}), 200
    except Exception as e:
        return error_response(e, "updating worker location")


@worker_bp.route("/nearby-jobs", methods=["GET"])
@worker_required
def api_list_nearby_jobs():
    """Up to 20 matching jobs within the worker's service radius, newest first."""
    try:
        user_id, _ = current_actor()
        jobs = get_worker_service().list_nearby_jobs(user_id)
        return jsonify({"jobs": jobs}), 200
    except Exception as e:
        return error_response(e, "fetching nearby jobs")


@worker_bp.route("/categories", methods=["GET"])
@worker_required
def api_list_categories():
    try:
        categories = get_worker_service().list_categories()
        return jsonify({"categories": categories}), 200
    except Exception as e:
        return error_response(e, "fetching categories")
