from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.responses import json_body, json_error
from ..container import Container
from ..core.exceptions import AuthenticationError, EmailTakenError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/create", methods=["POST"], endpoint="auth_create")
    def auth_create():
        data = json_body()
        try:
            account = container.account_service.create(data.get("email", ""), data.get("password", ""))
            session_id = container.session_service.open(account)
            return jsonify(
                {
                    "success": True,
                    "sessionId": session_id,
                    "email": account.email,
                    "message": "Account created successfully",
                }
            )
        except ValidationError as e:
            return json_error(str(e), 400)
        except EmailTakenError as e:
            return json_error(str(e), 409)
        except Exception:
            logger.exception("Create account error")
            return json_error("Internal server error", 500)

    @app.route("/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        data = json_body()
        try:
            account = container.account_service.authenticate(data.get("email", ""), data.get("password", ""))
            session_id = container.session_service.open(account)
            document = container.attendance_service.load_document(account.account_id)
            return jsonify(
                {
                    "success": True,
                    "sessionId": session_id,
                    "email": account.email,
                    **document.to_dict(),
                }
            )
        except ValidationError as e:
            return json_error(str(e), 400)
        except AuthenticationError as e:
            return json_error(str(e), 401)
        except Exception:
            logger.exception("Login error")
            return json_error("Internal server error", 500)

    @app.route("/auth/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        data = json_body()
        try:
            container.session_service.close(data.get("sessionId", ""))
            return jsonify({"success": True})
        except ValidationError as e:
            return json_error(str(e), 400)
        except Exception:
            logger.exception("Logout error")
            return json_error("Internal server error", 500)
