import logging
import os
from typing import Optional

import msal

logger = logging.getLogger(__name__)

# Public "Microsoft Graph PowerShell" client ID, allows Device Code Flow without an app registration.
DEFAULT_CLIENT_ID = "14d82eec-204b-4c2f-b7e8-296a70dab67e"
AUTHORITY_URL = "https://login.microsoftonline.com/common"
SCOPES = ["Files.ReadWrite.All", "User.Read"]

def get_onedrive_token(client_id: Optional[str] = None) -> Optional[str]:
    """
    Authenticates using MSAL Device Code Flow.
    Returns the access token or None on failure.
    """
    cid = client_id or DEFAULT_CLIENT_ID
    app = msal.PublicClientApplication(cid, authority=AUTHORITY_URL)

    flow = app.initiate_device_flow(scopes=SCOPES)
    if "user_code" not in flow:
        logger.error(f"Failed to create device flow. Error: {flow.get('error')}")
        return None

    print("\n" + "="*60)
    print("OneDrive Authentication Required")
    print(flow["message"])
    print("="*60 + "\n")

    result = app.acquire_token_by_device_flow(flow)

    if "access_token" in result:
        logger.info("OneDrive authentication successful")
        return result["access_token"]

    logger.error(f"OneDrive authentication failed: {result.get('error')} {result.get('error_description')}")
    return None

def resolve_onedrive_token(disk_config: dict) -> Optional[str]:
    """Token from the disk config, then ONEDRIVE_ACCESS_TOKEN, then an interactive login."""
    token = disk_config.get("access_token") or os.environ.get("ONEDRIVE_ACCESS_TOKEN")
    if token:
        return token
    client_id = disk_config.get("client_id") or os.environ.get("ONEDRIVE_CLIENT_ID")
    return get_onedrive_token(client_id)
