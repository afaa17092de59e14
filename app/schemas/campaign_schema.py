from marshmallow import Schema, fields, validates, ValidationError, EXCLUDE


class CreateCampaignSchema(Schema):
    """
    Campaign creation payload.

    Example:
        CreateCampaignSchema().load({"name": "Spring launch"})
    """
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, error_messages={
        "required": "name required"
    })

    @validates('name')
    def validate_name(self, value, **kwargs):
        if not value or not value.strip():
            raise ValidationError("name required")
        if len(value.strip()) > 255:
            raise ValidationError("Name must be less than 255 characters")


class AddLinksSchema(Schema):
    """
    Link ingestion payload: {"campaignId": "...", "urls": ["...", ...]}
    """
    class Meta:
        unknown = EXCLUDE

    campaign_id = fields.Str(required=True, data_key='campaignId', error_messages={
        "required": "campaignId required"
    })
    urls = fields.List(fields.Raw(allow_none=True), required=True, error_messages={
        "required": "urls required"
    })

    @validates('campaign_id')
    def validate_campaign_id(self, value, **kwargs):
        if not value or not value.strip():
            raise ValidationError("campaignId required")

    @validates('urls')
    def validate_urls(self, value, **kwargs):
        if not value:
            raise ValidationError("urls required")


create_campaign_schema = CreateCampaignSchema()
add_links_schema = AddLinksSchema()
