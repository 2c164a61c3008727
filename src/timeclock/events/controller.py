from __future__ import annotations

import logging

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..common.datetime_utils import now_local
from ..container import Container
from ..core.constants import EVENT_TYPE_LABELS
from ..core.exceptions import (
    DeletionWindowExpiredError,
    NotLatestRecordError,
    RecordNotFoundError,
    ValidationError,
)
from ..reporting.csv_export import encode_csv, punches_to_csv
from ..web import current_user_id, login_required
from .service import parse_event_type

logger = logging.getLogger(__name__)

# HTTP status per deletion failure
_DELETE_ERROR_STATUS = {
    RecordNotFoundError: 404,
    NotLatestRecordError: 403,
    DeletionWindowExpiredError: 403,
}


def register(app: Flask, container: Container) -> None:
    svc = container.punch_service

    @app.route("/", endpoint="index")
    @login_required
    def index():
        user_id = current_user_id()
        now = now_local(container.tz)
        return render_template(
            "index.html",
            now=now,
            status=svc.current_status(user_id),
            punches=svc.today_punches(user_id, now=now),
            active_page="index",
        )

    @app.route("/punch", methods=["POST"], endpoint="punch")
    @login_required
    def punch():
        try:
            kind = parse_event_type(request.form.get("type", ""))
            svc.punch(current_user_id(), kind)
            flash(f"{EVENT_TYPE_LABELS[kind]}を記録しました", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("punch failed unexpectedly")
            flash("打刻中にシステムエラーが発生しました", "danger")
        return redirect(url_for("index"))

    @app.route("/punch/<int:event_id>/delete", methods=["POST"], endpoint="delete_punch")
    @login_required
    def delete_punch(event_id: int):
        try:
            svc.delete_latest(current_user_id(), event_id)
            flash("打刻を削除しました", "success")
        except (RecordNotFoundError, NotLatestRecordError, DeletionWindowExpiredError) as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("delete failed unexpectedly")
            flash("削除中にシステムエラーが発生しました", "danger")
        return redirect(url_for("index"))

    @app.route("/api/punches/<int:event_id>", methods=["DELETE"], endpoint="api_delete_punch")
    @login_required
    def api_delete_punch(event_id: int):
        try:
            svc.delete_latest(current_user_id(), event_id)
            return jsonify({"success": True}), 200
        except (RecordNotFoundError, NotLatestRecordError, DeletionWindowExpiredError) as e:
            return jsonify({"success": False, "message": str(e)}), _DELETE_ERROR_STATUS[type(e)]
        except Exception:
            logger.exception("delete failed unexpectedly")
            return jsonify({"success": False, "message": "削除中にシステムエラーが発生しました"}), 500

    @app.route("/modify", methods=["GET", "POST"], endpoint="modify")
    @login_required
    def modify():
        form = {
            "date": request.form.get("date", ""),
            "time": request.form.get("time", ""),
            "type": request.form.get("type", ""),
        }
        if request.method == "POST":
            try:
                svc.record_correction(
                    current_user_id(),
                    date_s=form["date"],
                    time_s=form["time"],
                    type_s=form["type"],
                )
                flash("打刻を修正登録しました", "success")
                return redirect(url_for("records"))
            except ValidationError as e:
                flash(str(e), "warning")
            except Exception:
                logger.exception("correction failed unexpectedly")
                flash("修正登録中にシステムエラーが発生しました", "danger")

        return render_template("modify.html", form=form, active_page="modify")

    @app.route("/csv", endpoint="punches_csv")
    @login_required
    def punches_csv():
        events = svc.list_punches(current_user_id())
        return app.response_class(
            encode_csv(punches_to_csv(events, container.tz)),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=punches.csv"},
        )
