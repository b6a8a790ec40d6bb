from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.http import json_body, login_required
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    def _start_session(s_user) -> None:
        session.clear()
        session.permanent = True
        session["user_id"] = s_user.user_id
        session["username"] = s_user.username
        session["email"] = s_user.email

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        data = json_body()
        container.auth_service.register(
            username=data.get("username", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
        )
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        _start_session(s_user)
        return jsonify({"id": s_user.user_id, "username": s_user.username, "email": s_user.email}), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        data = json_body()
        login = data.get("login") or data.get("username") or data.get("email") or ""
        s_user = container.auth_service.authenticate(login, data.get("password", ""))
        _start_session(s_user)
        return jsonify({"id": s_user.user_id, "username": s_user.username, "email": s_user.email})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def auth_me():
        return jsonify({"id": session["user_id"], "username": session.get("username"), "email": session.get("email")})
