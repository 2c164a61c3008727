from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..container import Container
from ..core.exceptions import AuthenticationError, ValidationError
from ..web import current_user_id, login_required

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if "user_id" in session:
            return redirect(url_for("index"))

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")

            try:
                s_user = container.auth_service.authenticate(email, password)

                session.clear()
                session.permanent = True
                session["user_id"] = s_user.user_id
                session["name"] = s_user.full_name
                session["email"] = s_user.email
                session["role"] = s_user.role.value

                flash("ログインしました", "success")
                return redirect(url_for("index"))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("login failed unexpectedly")
                flash("ログイン中にシステムエラーが発生しました", "danger")

        return render_template("login.html", email=request.form.get("email", ""))

    @app.route("/signup", methods=["GET", "POST"], endpoint="signup")
    def signup():
        if "user_id" in session:
            return redirect(url_for("index"))

        form = {"name": request.form.get("name", ""), "email": request.form.get("email", "")}
        if request.method == "POST":
            try:
                container.user_service.register(
                    full_name=request.form.get("name", ""),
                    email=request.form.get("email", ""),
                    password=request.form.get("password", ""),
                    password_confirm=request.form.get("password_confirm", ""),
                )
                flash("アカウントを作成しました。ログインしてください", "success")
                return redirect(url_for("login"))
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("signup failed unexpectedly")
                flash("アカウント作成中にシステムエラーが発生しました", "danger")

        return render_template("signup.html", form=form)

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("ログアウトしました", "info")
        return redirect(url_for("login"))

    @app.route("/account", endpoint="account")
    @login_required
    def account():
        try:
            user = container.user_service.get_account(current_user_id())
        except ValidationError:
            session.clear()
            return redirect(url_for("login"))
        return render_template("account.html", user=user, active_page="account")
