from __future__ import annotations

import logging
from typing import Any, Dict, List, NewType, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .config import MigrationConfig
from .errors import StoreError


logger = logging.getLogger(__name__)

SECURE_STRING = "SecureString"

# Opaque continuation cursor handed back by GetParametersByPath
PageToken = NewType("PageToken", str)


class Parameter(BaseModel):
    """A single Parameter Store entry as returned by GetParametersByPath.

    `value` is None when the response carried no payload (e.g. decryption
    was not performed). Unused response keys (Version, ARN, ...) are ignored.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="Name")
    value: Optional[str] = Field(default=None, alias="Value")
    type: str = Field(..., alias="Type")


class ParameterPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    parameters: List[Parameter] = Field(default_factory=list, alias="Parameters")
    next_token: Optional[PageToken] = Field(default=None, alias="NextToken")

    @field_validator("next_token", mode="before")
    @classmethod
    def _blank_token_is_none(cls, v: Any) -> Any:
        return v if v not in (None, "") else None


def _error_code(e: ClientError) -> Optional[str]:
    return e.response.get("Error", {}).get("Code")


class ParameterStore:
    """
    Thin wrapper around the boto3 SSM client for the two calls a migration needs.

    Usage
    - `fetch_page(path, recursive=..., with_decryption=..., next_token=...)`
      returns one `ParameterPage`. Pass the previous page's `next_token` to
      continue; omit it on the first call.
    - `write_parameter(name, value)` overwrites an entry as SecureString and
      returns the new version number.

    Every botocore failure is re-raised as `StoreError`. Retries are whatever
    the botocore client is configured with; none are added here.
    """

    def __init__(self, *, ssm: Optional[object] = None, region_name: Optional[str] = None) -> None:
        if ssm is not None:
            self._ssm = ssm
            return
        try:
            self._ssm = boto3.client("ssm", region_name=region_name)
        except BotoCoreError as e:
            raise StoreError(
                f"Could not create SSM client for region {region_name!r}: {e}", operation="CreateClient"
            ) from e

    @classmethod
    def from_config(cls, config: MigrationConfig) -> "ParameterStore":
        return cls(region_name=config.region)

    def fetch_page(
        self,
        path: str,
        *,
        recursive: bool = True,
        with_decryption: bool = True,
        next_token: Optional[PageToken] = None,
    ) -> ParameterPage:
        kwargs: Dict[str, Any] = {
            "Path": path,
            "Recursive": recursive,
            "WithDecryption": with_decryption,
        }
        if next_token:
            kwargs["NextToken"] = next_token

        logger.debug("GetParametersByPath path=%s continued=%s", path, bool(next_token))
        try:
            resp = self._ssm.get_parameters_by_path(**kwargs)
        except ClientError as e:
            raise StoreError(
                f"GetParametersByPath failed for {path}: {e}",
                operation="GetParametersByPath",
                code=_error_code(e),
            ) from e
        except BotoCoreError as e:
            raise StoreError(
                f"GetParametersByPath failed for {path}: {e}", operation="GetParametersByPath"
            ) from e

        try:
            return ParameterPage.model_validate(resp)
        except ValidationError as ex:
            raise StoreError(
                "Unexpected GetParametersByPath response shape", operation="GetParametersByPath"
            ) from ex

    def write_parameter(
        self,
        name: str,
        value: str,
        *,
        type: str = SECURE_STRING,
        overwrite: bool = True,
    ) -> int:
        """Put `value` under `name` with the given type; returns the new Version.

        Raises StoreError on any service or transport failure, including
        ParameterAlreadyExists when `overwrite` is False.
        """
        logger.debug("PutParameter name=%s type=%s overwrite=%s", name, type, overwrite)
        try:
            resp = self._ssm.put_parameter(Name=name, Value=value, Type=type, Overwrite=overwrite)
        except ClientError as e:
            raise StoreError(
                f"PutParameter failed for {name}: {e}", operation="PutParameter", code=_error_code(e)
            ) from e
        except BotoCoreError as e:
            raise StoreError(f"PutParameter failed for {name}: {e}", operation="PutParameter") from e
        return int(resp.get("Version", 0))
