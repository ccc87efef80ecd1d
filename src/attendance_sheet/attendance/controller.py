from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.responses import json_body, json_error
from ..container import Container
from ..core.constants import ALL_MEMBERS
from ..core.exceptions import NotFoundError, StorageUnavailableError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _account_id(session_id) -> str:
        if not session_id:
            raise ValidationError("Session ID is required")
        return container.session_service.resolve(session_id)

    @app.route("/attendance/load", methods=["GET"], endpoint="attendance_load")
    def attendance_load():
        try:
            account_id = _account_id(request.args.get("sessionId"))
            document = container.attendance_service.load_document(account_id)
            return jsonify({"success": True, **document.to_dict()})
        except ValidationError as e:
            return json_error(str(e), 400)
        except (NotFoundError, StorageUnavailableError):
            logger.warning("Load failed", exc_info=True)
            return json_error("Failed to load data", 500)
        except Exception:
            logger.exception("Load error")
            return json_error("Internal server error", 500)

    @app.route("/attendance/save", methods=["POST"], endpoint="attendance_save")
    def attendance_save():
        data = json_body()
        try:
            account_id = _account_id(data.get("sessionId"))
            roster = data.get("roster")
            if roster is None:
                roster = data.get("names")
            container.attendance_service.save_document(account_id, roster, data.get("attendance"))
            return jsonify({"success": True, "ok": True, "message": "Data saved successfully to database"})
        except ValidationError as e:
            return json_error(str(e), 400)
        except (NotFoundError, StorageUnavailableError):
            logger.warning("Save failed", exc_info=True)
            return json_error("Failed to save data", 500)
        except Exception:
            logger.exception("Save error")
            return json_error("Internal server error", 500)

    @app.route("/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    def attendance_stats():
        try:
            account_id = _account_id(request.args.get("sessionId"))
            date_key = request.args.get("date", "")
            stats = container.attendance_service.stats_for(account_id, date_key)
            return jsonify({"success": True, "date": date_key, **stats.to_dict()})
        except ValidationError as e:
            return json_error(str(e), 400)
        except (NotFoundError, StorageUnavailableError):
            logger.warning("Stats failed", exc_info=True)
            return json_error("Failed to load data", 500)
        except Exception:
            logger.exception("Stats error")
            return json_error("Internal server error", 500)

    @app.route("/attendance/analytics", methods=["GET"], endpoint="attendance_analytics")
    def attendance_analytics():
        try:
            account_id = _account_id(request.args.get("sessionId"))
            member = request.args.get("member") or ALL_MEMBERS
            analytics = container.attendance_service.analytics_for(account_id, member)
            return jsonify({"success": True, **analytics})
        except ValidationError as e:
            return json_error(str(e), 400)
        except (NotFoundError, StorageUnavailableError):
            logger.warning("Analytics failed", exc_info=True)
            return json_error("Failed to load data", 500)
        except Exception:
            logger.exception("Analytics error")
            return json_error("Internal server error", 500)

    @app.route("/attendance/export", methods=["GET"], endpoint="attendance_export")
    def attendance_export():
        try:
            account_id = _account_id(request.args.get("sessionId"))
            export = container.attendance_service.export_csv(account_id)
            return app.response_class(
                export.content,
                mimetype="text/csv",
                headers={"Content-Disposition": f"attachment; filename={export.filename}"},
            )
        except ValidationError as e:
            return json_error(str(e), 400)
        except (NotFoundError, StorageUnavailableError):
            logger.warning("Export failed", exc_info=True)
            return json_error("Failed to load data", 500)
        except Exception:
            logger.exception("Export error")
            return json_error("Internal server error", 500)
