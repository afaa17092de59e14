from app.models.campaign import Campaign
from app.models.campaign_link import CampaignLink

__all__ = ['Campaign', 'CampaignLink']
