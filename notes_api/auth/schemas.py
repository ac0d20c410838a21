from marshmallow import Schema, fields, validate, EXCLUDE


class CredentialsSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    username = fields.String(required=True, validate=validate.Length(min=1, max=150))
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1))


class SignupSchema(CredentialsSchema):
    pass


class LoginSchema(CredentialsSchema):
    pass


class TokenOut(Schema):
    message = fields.String(required=True)
    token = fields.String(required=True)
