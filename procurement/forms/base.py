from __future__ import annotations

from django import forms

INPUT_CLASS = "w-full px-3 py-2 border dark:border-form-darkBorder rounded"
CHECKBOX_CLASS = "h-4 w-4 text-primary"
FILE_CLASS = "w-full text-sm"

YES_NO = [("Yes", "Yes"), ("No", "No")]


class StyledFormMixin:
    """Apply Tailwind CSS classes to form fields."""

    def apply_styling(self) -> None:
        for field in self.fields.values():
            widget = field.widget
            if getattr(widget, "input_type", None) == "checkbox" or isinstance(
                widget, forms.CheckboxSelectMultiple
            ):
                widget.attrs.update({"class": CHECKBOX_CLASS})
            elif isinstance(widget, forms.ClearableFileInput):
                widget.attrs.update({"class": FILE_CLASS})
            else:
                classes = INPUT_CLASS
                if isinstance(widget, (forms.Select, forms.SelectMultiple)):
                    classes += " predictive"
                widget.attrs.update({"class": classes})

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.apply_styling()


def suggest(field: forms.Field, list_id: str) -> forms.Field:
    """Attach a ``<datalist>`` id so the input offers master-data values."""

    field.widget.attrs["list"] = list_id
    return field


def date_input() -> forms.DateInput:
    return forms.DateInput(attrs={"type": "date"})


class ActionForm(StyledFormMixin, forms.Form):
    """Form bound to the record a workflow step acts on."""

    def __init__(self, *args, obj=None, **kwargs):
        self.obj = obj
        super().__init__(*args, **kwargs)
