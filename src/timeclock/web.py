from __future__ import annotations

from functools import wraps

from flask import Flask, flash, redirect, session, url_for

from .container import Container
from .core.constants import EVENT_TYPE_LABELS, WORK_STATUS_LABELS


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            flash("ログインしてください", "warning")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int:
    return int(session["user_id"])


def register_helpers(app: Flask, container: Container) -> None:
    app.jinja_env.globals["csrf_token"] = lambda: ""
    app.jinja_env.globals["event_type_labels"] = {k.value: v for k, v in EVENT_TYPE_LABELS.items()}
    app.jinja_env.globals["status_labels"] = {k.value: v for k, v in WORK_STATUS_LABELS.items()}

    @app.template_filter("yen")
    def yen(value) -> str:
        return f"¥{int(value or 0):,}"
