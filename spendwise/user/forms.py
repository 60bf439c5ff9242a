"""Forms for the user blueprint."""

from flask_wtf import FlaskForm  # type: ignore
from flask_wtf.file import FileAllowed, FileRequired  # type: ignore
from wtforms import DecimalField, FileField, StringField
from wtforms.validators import DataRequired, Length, NumberRange, Optional


class UsernameForm(FlaskForm):
    """Form for choosing or changing a username.

    Format rules live in the username service so the same message is
    returned whichever way the username reaches it.
    """

    username = StringField("Username", validators=[DataRequired()])


class ProfileForm(FlaskForm):
    """Form for updating the display fields copied to friends and circles."""

    display_name = StringField(
        "Display Name", validators=[Optional(), Length(min=1, max=50)]
    )
    photo_url = StringField("Photo URL", validators=[Optional(), Length(max=2048)])


class BudgetForm(FlaskForm):
    """Form for setting the monthly budget."""

    budget = DecimalField(
        "Monthly Budget",
        validators=[NumberRange(min=0, message="Budget must be zero or more.")],
        places=2,
    )


class ProfileImageForm(FlaskForm):
    """Form for uploading a profile picture."""

    image = FileField(
        "Profile Picture",
        validators=[
            FileRequired(),
            FileAllowed(["jpg", "jpeg", "png", "gif", "webp"], "Images only!"),
        ],
    )
