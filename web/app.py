"""Flask web application for vaccine tracking."""

import os
from datetime import date

from flask import Flask, render_template, request, redirect, url_for, flash

from vaccines import (
    AttentionLevel,
    FileReminders,
    InMemoryReminders,
    VaccineFilter,
    VaccineForm,
    VaccineStorage,
    VaccineTracker,
    VaccineValidationError,
    count_by_filter,
)
from vaccines.renewal import MAX_RENEWAL_MONTHS, MAX_RENEWAL_YEARS, parse_date


def color_classes(color: str) -> str:
    """Get Tailwind color classes for a status or category color token."""
    colors = {
        "danger": "bg-red-100 text-red-800 border-red-200",
        "caution": "bg-yellow-100 text-yellow-800 border-yellow-200",
        "neutral-positive": "bg-green-100 text-green-800 border-green-200",
        "purple": "bg-purple-500 text-white",
        "green": "bg-green-600 text-white",
        "blue": "bg-blue-500 text-white",
        "gray": "bg-gray-500 text-white",
    }
    return colors.get(color, "bg-gray-100 text-gray-800")


def attention_badge_color(level: AttentionLevel) -> str:
    """Get Tailwind color classes for the attention dot."""
    colors = {
        AttentionLevel.OVERDUE: "bg-red-500",
        AttentionLevel.WARNING: "bg-orange-400",
    }
    return colors.get(level, "")


def format_date(value):
    """Format date for display."""
    if value is None:
        return "—"
    return value.isoformat()


def form_from_request():
    """
    Build a VaccineForm from submitted form fields.

    Returns (form, errors). Fields that fail to parse fall back to their
    defaults and add an error, so the form can be re-rendered with
    everything else the user typed.
    """
    errors = []
    should_renew = request.form.get("should_renew") == "on"
    try:
        vaccination_date = parse_date(request.form.get("date") or date.today())
    except ValueError:
        vaccination_date = date.today()
        errors.append("Invalid vaccination date")
    years = months = 0
    try:
        years = int(request.form.get("renewal_years") or 0)
        months = int(request.form.get("renewal_months") or 0)
    except ValueError:
        errors.append("Invalid renewal interval")
    form = VaccineForm(
        name=request.form.get("name") or "",
        date=vaccination_date,
        should_renew=should_renew,
        renewal_years=years if should_renew else 0,
        renewal_months=months if should_renew else 0,
    )
    return form, errors


def create_app(tracker: VaccineTracker = None) -> Flask:
    app = Flask(__name__)
    app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")

    if tracker is None:
        reminders_file = os.environ.get("VACCINE_REMINDERS_FILE")
        reminders = FileReminders(reminders_file) if reminders_file else InMemoryReminders()
        tracker = VaccineTracker(VaccineStorage(), reminders)
    app.config["TRACKER"] = tracker

    # Register template filters
    app.jinja_env.filters["format_date"] = format_date
    app.jinja_env.filters["color_classes"] = color_classes
    app.jinja_env.filters["attention_badge_color"] = attention_badge_color

    def render_form(form: VaccineForm, vaccine=None, errors=None):
        return render_template(
            "form.html",
            form=form,
            vaccine=vaccine,
            errors=errors or [],
            today=date.today().isoformat(),
            max_years=MAX_RENEWAL_YEARS,
            max_months=MAX_RENEWAL_MONTHS,
        )

    @app.route("/")
    def index():
        """Vaccine list with filter menu."""
        now = date.today()
        try:
            mode = VaccineFilter.parse(request.args.get("filter", "all"))
        except ValueError:
            mode = VaccineFilter.ALL

        all_vaccines = tracker.vaccines()
        return render_template(
            "index.html",
            vaccines=tracker.visible(mode, now),
            counts=count_by_filter(all_vaccines, now),
            total=len(all_vaccines),
            filters=list(VaccineFilter),
            active_filter=mode,
            now=now,
            AttentionLevel=AttentionLevel,
        )

    @app.route("/vaccine/new", methods=["GET"])
    def new_vaccine_form():
        """Empty add form."""
        return render_form(VaccineForm(name="", date=date.today()))

    @app.route("/vaccine/new", methods=["POST"])
    def add_vaccine():
        """Handle add form submission."""
        now = date.today()
        form, errors = form_from_request()
        try:
            if errors:
                raise VaccineValidationError(errors + form.errors(now))
            vaccine = tracker.add(form, now)
        except VaccineValidationError as e:
            return render_form(form, errors=e.errors), 400

        flash(f"Saved {vaccine.name}", "success")
        return redirect(url_for("index"))

    @app.route("/vaccine/<vaccine_id>")
    def vaccine_detail(vaccine_id: str):
        """Read-only detail page with status and suggested action."""
        try:
            vaccine = tracker.get(vaccine_id)
        except KeyError:
            flash(f"Vaccine '{vaccine_id}' not found", "error")
            return redirect(url_for("index"))

        now = date.today()
        return render_template(
            "detail.html",
            vaccine=vaccine,
            form=VaccineForm.from_vaccine(vaccine),
            info=vaccine.status_info(now),
            subtitle=vaccine.renewal_subtitle(now),
            action=vaccine.suggested_action(now),
        )

    @app.route("/vaccine/<vaccine_id>/edit", methods=["GET"])
    def edit_vaccine_form(vaccine_id: str):
        """Edit form prefilled from the stored vaccine."""
        try:
            vaccine = tracker.get(vaccine_id)
        except KeyError:
            flash(f"Vaccine '{vaccine_id}' not found", "error")
            return redirect(url_for("index"))
        return render_form(VaccineForm.from_vaccine(vaccine), vaccine=vaccine)

    @app.route("/vaccine/<vaccine_id>/edit", methods=["POST"])
    def edit_vaccine(vaccine_id: str):
        """Handle edit form submission."""
        try:
            vaccine = tracker.get(vaccine_id)
        except KeyError:
            flash(f"Vaccine '{vaccine_id}' not found", "error")
            return redirect(url_for("index"))

        now = date.today()
        form, errors = form_from_request()
        try:
            if errors:
                raise VaccineValidationError(errors + form.errors(now))
            tracker.update(vaccine.id, form, now)
        except VaccineValidationError as e:
            return render_form(form, vaccine=vaccine, errors=e.errors), 400

        flash(f"Updated {form.name.strip()}", "success")
        return redirect(url_for("vaccine_detail", vaccine_id=vaccine.id))

    @app.route("/vaccine/<vaccine_id>/delete", methods=["POST"])
    def delete_vaccine(vaccine_id: str):
        """Delete a vaccine and its reminder."""
        try:
            vaccine = tracker.delete(vaccine_id)
        except KeyError:
            flash(f"Vaccine '{vaccine_id}' not found", "error")
            return redirect(url_for("index"))

        flash(f"Deleted {vaccine.name}", "success")
        return redirect(url_for("index"))

    return app


if __name__ == "__main__":
    # Run with debug mode for development
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    create_app().run(debug=True, host="0.0.0.0", port=5001)
