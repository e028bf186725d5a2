"""
Input forms for the scheduling JSON API.

Forms validate request bodies and query strings only; business rules live in
apps.scheduling.services. Use clean_or_raise() to turn an invalid form into a
ValidationError carrying per-field messages.
"""

from django import forms
from django.conf import settings

from apps.scheduling.models import POSITIVE_INT_MAX, ShiftAssignment
from core.exceptions import ValidationError

TIME_FORMATS = ["%H:%M", "%H:%M:%S"]


def clean_or_raise(form: forms.Form) -> dict:
    """
    Return form.cleaned_data, or raise ValidationError with the field errors.
    """
    if not form.is_valid():
        details = {
            field: [error["message"] for error in errors]
            for field, errors in form.errors.get_json_data().items()
        }
        raise ValidationError("Invalid request", details=details)
    return form.cleaned_data


class ShiftSlotForm(forms.Form):
    """Body of POST business-days/<id>/shift-slots/."""

    position_id = forms.UUIDField()
    slot_name = forms.CharField(max_length=settings.ROSTERDESK["SLOT_NAME_MAX_LENGTH"])
    instance_name = forms.CharField(max_length=255, required=False)
    start_time = forms.TimeField(input_formats=TIME_FORMATS)
    end_time = forms.TimeField(input_formats=TIME_FORMATS)
    required_count = forms.IntegerField(min_value=1, max_value=POSITIVE_INT_MAX)
    priority = forms.IntegerField(min_value=1, max_value=POSITIVE_INT_MAX, required=False)

    def clean(self):
        cleaned = super().clean()
        start, end = cleaned.get("start_time"), cleaned.get("end_time")
        if start is not None and start == end:
            # end < start is an overnight slot; only a zero-length window is invalid
            self.add_error("end_time", "start_time and end_time must differ.")
        return cleaned


class ConfirmAssignmentForm(forms.Form):
    """Body of POST shift-assignments/."""

    slot_id = forms.UUIDField()
    member_id = forms.UUIDField()
    note = forms.CharField(required=False, max_length=2000)


class CancelAssignmentForm(forms.Form):
    """Body of PATCH shift-assignments/<id>/. The only accepted transition is to cancelled."""

    assignment_status = forms.ChoiceField(
        choices=[(ShiftAssignment.Status.CANCELLED, "Cancelled")],
        required=False,
    )


class AssignmentFilterForm(forms.Form):
    """Query string of GET shift-assignments/."""

    member_id = forms.UUIDField(required=False)
    slot_id = forms.UUIDField(required=False)
    business_day_id = forms.UUIDField(required=False)
    assignment_status = forms.ChoiceField(
        choices=[("", "Any")] + list(ShiftAssignment.Status.choices),
        required=False,
    )
    start_date = forms.DateField(required=False)
    end_date = forms.DateField(required=False)

    def clean(self):
        cleaned = super().clean()
        start, end = cleaned.get("start_date"), cleaned.get("end_date")
        if start and end and start > end:
            self.add_error("end_date", "end_date must not be before start_date.")
        return cleaned
