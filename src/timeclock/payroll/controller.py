from __future__ import annotations

import io

from flask import Flask, flash, redirect, render_template, request, send_file, url_for

from ..common.datetime_utils import local_day, now_local
from ..container import Container
from ..core.exceptions import ValidationError
from ..reporting.csv_export import encode_csv, timesheet_to_csv
from ..reporting.excel_export import XLSX_MIMETYPE, timesheet_to_xlsx
from ..web import current_user_id, login_required


def register(app: Flask, container: Container) -> None:
    svc = container.timesheet_service

    def _build_report():
        now = now_local(container.tz)
        start, end = svc.resolve_period(
            request.args.get("from"),
            request.args.get("to"),
            today=local_day(now, container.tz),
        )
        return svc.build(user_id=current_user_id(), start=start, end=end, now=now)

    def _filename(report, ext: str) -> str:
        return f"timesheet_{report.start.strftime('%Y%m%d')}_{report.end.strftime('%Y%m%d')}.{ext}"

    @app.route("/records", methods=["GET"], endpoint="records")
    @login_required
    def records():
        try:
            report = _build_report()
        except ValidationError as e:
            flash(str(e), "warning")
            return redirect(url_for("records"))

        return render_template(
            "records.html",
            report=report,
            start=report.start.strftime("%Y-%m-%d"),
            end=report.end.strftime("%Y-%m-%d"),
            active_page="records",
        )

    @app.route("/records.csv", methods=["GET"], endpoint="records_csv")
    @login_required
    def records_csv():
        try:
            report = _build_report()
        except ValidationError as e:
            flash(str(e), "warning")
            return redirect(url_for("records"))

        return app.response_class(
            encode_csv(timesheet_to_csv(report)),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={_filename(report, 'csv')}"},
        )

    @app.route("/records.xlsx", methods=["GET"], endpoint="records_xlsx")
    @login_required
    def records_xlsx():
        try:
            report = _build_report()
        except ValidationError as e:
            flash(str(e), "warning")
            return redirect(url_for("records"))

        return send_file(
            io.BytesIO(timesheet_to_xlsx(report)),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=_filename(report, "xlsx"),
        )
