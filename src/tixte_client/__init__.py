"""Tixte Client - An async Python library for the Tixte file-hosting API.

Example usage:
    from tixte_client import TixteClient, UploadOptions

    async with TixteClient("my-api-key") as client:
        result = await client.upload_image(
            "screenshot.png",
            "me.tixte.co",
            UploadOptions(extension="png", file_name="screenshot"),
        )
        print(result.payload if result.ok else result)

    # Results can also be unwrapped, raising on anything but Ok
    user = (await client.get_user_info()).unwrap()
"""

from tixte_client.client import TixteClient
from tixte_client.config import ClientConfig
from tixte_client.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    RemoteApiError,
    TixteError,
    TransportFailure,
)
from tixte_client.models import (
    ApiResult,
    InvalidArgument,
    Ok,
    RemoteError,
    TransportError,
    UploadOptions,
)

__version__ = "0.1.0"

__all__ = [
    # Main client
    "TixteClient",
    "ClientConfig",
    # Models
    "ApiResult",
    "Ok",
    "InvalidArgument",
    "RemoteError",
    "TransportError",
    "UploadOptions",
    # Exceptions
    "TixteError",
    "ConfigurationError",
    "InvalidArgumentError",
    "RemoteApiError",
    "TransportFailure",
]
