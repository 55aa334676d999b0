"""SQL queries for notification dispatch and worker inboxes."""

# Append one notification to a worker's inbox
INSERT_WORKER_NOTIFICATION = """
    INSERT INTO marketplace.worker_notifications (
        worker_id, type, message, job_id, is_read, created_at
    )
    VALUES (%s, %s, %s, %s, %s, %s)
    RETURNING notification_id
"""

# Notifications for a worker, newest first, with the linked job summary
GET_NOTIFICATIONS_FOR_WORKER = """
    SELECT
        n.notification_id,
        n.type,
        n.message,
        n.is_read,
        n.created_at,
        n.job_id,
        j.title AS job_title,
        j.description AS job_description,
        j.status AS job_status,
        j.deadline AS job_deadline,
        j.address AS job_address
    FROM marketplace.worker_notifications n
    LEFT JOIN marketplace.jobs j
        ON n.job_id = j.job_id
    WHERE n.worker_id = %s
    ORDER BY n.created_at DESC, n.notification_id DESC
"""

# Unread notification count for a worker
COUNT_UNREAD_NOTIFICATIONS = """
    SELECT COUNT(*)
    FROM marketplace.worker_notifications
    WHERE worker_id = %s
        AND is_read = false
"""

# Mark one of the worker's notifications as read
MARK_NOTIFICATION_READ = """
    UPDATE marketplace.worker_notifications
    SET is_read = true
    WHERE notification_id = %s
        AND worker_id = %s
    RETURNING notification_id
"""
