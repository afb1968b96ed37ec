"""
Input validation for request bodies.

Each endpoint that accepts a body has a form listing its required and
optional fields. ``validate`` runs a form against a payload and raises
ValidationError with the first field error.
"""
from django import forms
from django.core.exceptions import NON_FIELD_ERRORS

from .conf import blog_settings
from .exceptions import ValidationError

# JSON keys that differ from the form field names
FIELD_ALIASES = {
    "featuredImage": "featured_image",
}


def validate(form_class, payload):
    """Return cleaned data for ``payload`` or raise ValidationError."""
    data = {FIELD_ALIASES.get(key, key): value for key, value in payload.items()}
    form = form_class(data=data)
    if not form.is_valid():
        raise ValidationError(first_error(form))
    return form.cleaned_data


def first_error(form):
    """Pick the first error message, in field declaration order."""
    for name in list(form.fields) + [NON_FIELD_ERRORS]:
        errors = form.errors.get(name)
        if errors:
            return errors[0]
    return "Invalid input"


class StringField(forms.CharField):
    """
    CharField that only accepts JSON strings.

    Numbers, booleans, lists and objects are rejected instead of being
    stored as their Python repr. The ``invalid`` message falls back to the
    ``required`` one.
    """

    def to_python(self, value):
        if value not in self.empty_values and not isinstance(value, str):
            message = self.error_messages.get("invalid", self.error_messages["required"])
            raise forms.ValidationError(message, code="invalid")
        return super().to_python(value)


class RegisterForm(forms.Form):
    username = StringField(
        max_length=150,
        error_messages={"required": "Username is required"},
    )
    email = forms.EmailField(
        error_messages={
            "required": "Valid email is required",
            "invalid": "Valid email is required",
        },
    )
    password = StringField(
        strip=False,
        error_messages={"required": "Password is required"},
    )

    def clean_email(self):
        return self.cleaned_data["email"].lower()

    def clean_password(self):
        password = self.cleaned_data["password"]
        min_length = blog_settings.PASSWORD_MIN_LENGTH
        if len(password) < min_length:
            raise forms.ValidationError(
                f"Password must be at least {min_length} characters"
            )
        return password


class LoginForm(forms.Form):
    # Accepts either the username or the email address
    username = StringField(
        error_messages={"required": "Username or email is required"},
    )
    password = StringField(
        strip=False,
        error_messages={"required": "Password is required"},
    )


class CategoryForm(forms.Form):
    name = StringField(
        max_length=100,
        error_messages={"required": "Name is required"},
    )
    description = StringField(
        required=False,
        error_messages={"invalid": "Description must be a string"},
    )


class PostForm(forms.Form):
    title = StringField(
        max_length=255,
        error_messages={"required": "Title is required"},
    )
    content = StringField(error_messages={"required": "Content is required"})
    category = forms.IntegerField(
        min_value=1,
        error_messages={
            "required": "Valid category ID is required",
            "invalid": "Valid category ID is required",
            "min_value": "Valid category ID is required",
        },
    )
    featured_image = StringField(
        max_length=500,
        required=False,
        error_messages={"invalid": "Featured image must be a string"},
    )


class PostUpdateForm(forms.Form):
    """
    Partial post update.

    Every field is optional, but a field that is sent may not be blank.
    Only the fields present in the payload end up in cleaned_data.
    """

    title = StringField(
        max_length=255,
        required=False,
        error_messages={"invalid": "Title must be a string"},
    )
    content = StringField(
        required=False,
        error_messages={"invalid": "Content must be a string"},
    )
    category = forms.IntegerField(
        min_value=1,
        required=False,
        error_messages={
            "invalid": "Valid category ID is required",
            "min_value": "Valid category ID is required",
        },
    )
    featured_image = StringField(
        max_length=500,
        required=False,
        error_messages={"invalid": "Featured image must be a string"},
    )

    blank_messages = {
        "title": "Title cannot be empty",
        "content": "Content cannot be empty",
        "category": "Valid category ID is required",
    }

    def clean(self):
        cleaned = super().clean()
        for name, message in self.blank_messages.items():
            if name in self.data and name in cleaned and cleaned[name] in ("", None):
                self.add_error(name, message)
        return {name: value for name, value in cleaned.items() if name in self.data}


class CommentForm(forms.Form):
    content = StringField(error_messages={"required": "Content is required"})

    def clean_content(self):
        content = self.cleaned_data["content"]
        max_length = blog_settings.COMMENT_MAX_LENGTH
        if len(content) > max_length:
            raise forms.ValidationError(
                f"Comment cannot be longer than {max_length} characters"
            )
        return content
