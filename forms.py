from datetime import datetime

from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict
from wtforms import DateTimeField, IntegerField, SelectField, StringField
from wtforms.validators import (
    DataRequired,
    Email,
    InputRequired,
    Length,
    NumberRange,
    ValidationError,
)

from models.task import TaskStatus
from models.team_member import TeamMemberRole
from services.errors import ValidationFailure
from services.store import MAX_ENTITY_ID

# ISO 8601 variants sent by browsers and JSON clients
DATETIME_FORMATS = [
    "%Y-%m-%dT%H:%M:%S.%fZ",
    "%Y-%m-%dT%H:%M:%SZ",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d",
]
STATUS_CHOICES = [(TaskStatus.IN_PROGRESS.value, "In progress"), (TaskStatus.COMPLETE.value, "Complete")]
ROLE_CHOICES = [(role.value, role.value) for role in TeamMemberRole]


def _id_validators(required_message):
    return [
        InputRequired(message=required_message),
        NumberRange(min=1, max=MAX_ENTITY_ID, message="Not a valid identifier."),
    ]


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def _lower(value):
    return value.lower() if isinstance(value, str) else value


class ClientForm(FlaskForm):
    name = StringField(
        "Name",
        validators=[
            DataRequired(message="Client name is required."),
            Length(max=200, message="Client name cannot exceed 200 characters."),
        ],
        filters=[_strip],
    )
    address = StringField(
        "Address",
        validators=[
            DataRequired(message="Address is required."),
            Length(max=500, message="Address cannot exceed 500 characters."),
        ],
        filters=[_strip],
    )


class ProjectForm(FlaskForm):
    name = StringField(
        "Name",
        validators=[
            DataRequired(message="Project name is required."),
            Length(max=200, message="Project name cannot exceed 200 characters."),
        ],
        filters=[_strip],
    )
    start_date = DateTimeField(
        "Start Date",
        format=DATETIME_FORMATS,
        validators=[InputRequired(message="Start date is required.")],
    )
    end_date = DateTimeField(
        "End Date",
        format=DATETIME_FORMATS,
        validators=[InputRequired(message="End date is required.")],
    )
    client_id = IntegerField("Client", _id_validators("Client is required."))

    def validate_end_date(self, field):
        start = self.start_date.data
        if start is not None and field.data is not None and field.data <= start:
            raise ValidationError("End date must be after start date.")


class TaskForm(FlaskForm):
    name = StringField(
        "Name",
        validators=[
            DataRequired(message="Task name is required."),
            Length(max=200, message="Task name cannot exceed 200 characters."),
        ],
        filters=[_strip],
    )
    status = SelectField(
        "Status",
        choices=STATUS_CHOICES,
        default=TaskStatus.IN_PROGRESS.value,
    )
    project_id = IntegerField("Project", _id_validators("Project is required."))
    assigned_team_member_id = IntegerField(
        "Assigned Team Member",
        _id_validators("Assigned team member is required."),
    )


class TodoForm(FlaskForm):
    name = StringField(
        "Name",
        validators=[
            DataRequired(message="Todo name is required."),
            Length(max=200, message="Todo name cannot exceed 200 characters."),
        ],
        filters=[_strip],
    )
    status = SelectField(
        "Status",
        choices=STATUS_CHOICES,
        default=TaskStatus.IN_PROGRESS.value,
    )
    task_id = IntegerField("Task", _id_validators("Task is required."))


class TeamMemberForm(FlaskForm):
    def __init__(self, *args, member=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.current_member = member

    name = StringField(
        "Name",
        validators=[
            DataRequired(message="Team member name is required."),
            Length(max=100, message="Name cannot exceed 100 characters."),
        ],
        filters=[_strip],
    )
    role = SelectField(
        "Role",
        choices=ROLE_CHOICES,
        validators=[DataRequired(message="Role is required.")],
    )
    email = StringField(
        "Email",
        validators=[
            DataRequired(message="Email is required."),
            Email(message="Please enter a valid email."),
        ],
        filters=[_strip, _lower],
    )

    def validate_email(self, field):
        from models.team_member import TeamMember

        existing = TeamMember.query.filter_by(email=field.data).first()
        if existing and (not self.current_member or existing.id != self.current_member.id):
            raise ValidationError("This email is already in use.")


def _form_value(value):
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%dT%H:%M:%S")
    return str(value)


def bind_payload(form_class, payload, *, current=None, **form_kwargs):
    """Validate a JSON payload with ``form_class`` and return the bound form.

    ``current`` holds the record's existing values; payload keys override them
    so partial updates are validated as a whole record. Keys the form does not
    declare are ignored.

    Raises:
        ValidationFailure -- the payload is not an object or a field is invalid
    """
    if not isinstance(payload, dict):
        raise ValidationFailure("Request body must be a JSON object.")

    values = dict(current or {})
    values.update(payload)
    formdata = MultiDict()
    for key, value in values.items():
        if value is None:
            continue
        formdata.add(key, _form_value(value))

    form = form_class(formdata=formdata, meta={"csrf": False}, **form_kwargs)
    if not form.validate():
        raise ValidationFailure("Validation failed.", errors=form.errors)
    return form
