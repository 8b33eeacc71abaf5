"""Collect and persist Firebase project configuration.

The client config is what the Firebase console shows under *Project settings*
(usually pasted as a ``const firebaseConfig = {...};`` snippet).  The admin
config comes from a service-account JSON key.  Both are validated with
Pydantic before anything is written.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from rich.prompt import Confirm, Prompt

from t3fire.errors import ConfigValidationError
from t3fire.installers.env_vars import (
    FIREBASE_ADMIN_HEADER,
    admin_placeholder_body,
    format_assignment,
)
from t3fire.scaffolder.primitives import merge_env_block, merge_json, write_file
from t3fire.scaffolder.templates import TemplateRenderer
from t3fire.utils import console, print_error, print_success

# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class FirebaseClientConfig(BaseModel):
    """Web app config from the Firebase console."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    api_key: str = Field(..., alias="apiKey", min_length=1)
    auth_domain: str = Field(..., alias="authDomain", min_length=1)
    project_id: str = Field(..., alias="projectId", min_length=1)
    storage_bucket: str = Field(..., alias="storageBucket", min_length=1)
    messaging_sender_id: str = Field(..., alias="messagingSenderId", min_length=1)
    app_id: str = Field(..., alias="appId", min_length=1)


class FirebaseAdminConfig(BaseModel):
    """Service-account credentials for the Admin SDK."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    project_id: str = Field(..., alias="projectId", min_length=1)
    client_email: str = Field(
        ..., alias="clientEmail", pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
    )
    private_key: str = Field(..., alias="privateKey", min_length=1)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

_DECLARATION = re.compile(r"^\s*(?:const|let|var)\s+[\w$]+\s*=\s*")
_BARE_KEY = re.compile(r"([{,]\s*)([A-Za-z_$][\w$]*)\s*:")
_SINGLE_QUOTED = re.compile(r"'((?:[^'\\]|\\.)*)'")
_TRAILING_COMMA = re.compile(r",\s*([}\]])")


def _js_object_to_json(text: str) -> str:
    cleaned = _DECLARATION.sub("", text.strip())
    cleaned = re.sub(r";?\s*$", "", cleaned)
    cleaned = _SINGLE_QUOTED.sub(lambda m: json.dumps(m.group(1)), cleaned)
    cleaned = _BARE_KEY.sub(r'\1"\2":', cleaned)
    return _TRAILING_COMMA.sub(r"\1", cleaned)


def _load_object(text: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = json.loads(_js_object_to_json(text))
        except json.JSONDecodeError as exc:
            raise ConfigValidationError(
                f"Could not parse configuration: {exc.msg}"
            ) from exc
    if not isinstance(data, dict):
        raise ConfigValidationError("Configuration must be an object")
    return data


def _validation_message(exc: ValidationError) -> str:
    fields = ", ".join(
        ".".join(str(part) for part in error["loc"]) for error in exc.errors()
    )
    return f"Invalid or missing fields: {fields}"


def parse_client_config(text: str) -> FirebaseClientConfig:
    """Parse a pasted client config (JSON or a JavaScript object literal).

    Raises:
        ConfigValidationError: If the text cannot be parsed or a field is
            missing or empty.
    """
    data = _load_object(text)
    try:
        return FirebaseClientConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigValidationError(_validation_message(exc)) from exc


def parse_admin_config(text: str) -> FirebaseAdminConfig:
    """Parse a service-account JSON key (``project_id``, ``client_email``, ``private_key``).

    Raises:
        ConfigValidationError: If the JSON is invalid or a field is missing.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigValidationError(f"Invalid service account JSON: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise ConfigValidationError("Service account JSON must be an object")
    try:
        return FirebaseAdminConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigValidationError(_validation_message(exc)) from exc


# ---------------------------------------------------------------------------
# Interactive collection
# ---------------------------------------------------------------------------

_CLIENT_PROMPTS = [
    ("apiKey", "Firebase API Key"),
    ("authDomain", "Auth Domain"),
    ("projectId", "Project ID"),
    ("storageBucket", "Storage Bucket"),
    ("messagingSenderId", "Messaging Sender ID"),
    ("appId", "App ID"),
]


def _collect_client() -> FirebaseClientConfig | None:
    method = Prompt.ask(
        "How would you like to provide the Firebase configuration?",
        choices=["paste", "manual", "skip"],
        default="paste",
        console=console,
    )
    if method == "skip":
        return None

    try:
        if method == "paste":
            text = Prompt.ask(
                "Paste your Firebase config object (Project Settings > Your apps)",
                console=console,
            )
            config = parse_client_config(text)
        else:
            values = {
                key: Prompt.ask(label, default="", console=console)
                for key, label in _CLIENT_PROMPTS
            }
            try:
                config = FirebaseClientConfig.model_validate(values)
            except ValidationError as exc:
                raise ConfigValidationError(_validation_message(exc)) from exc
    except ConfigValidationError as exc:
        print_error(f"{exc}. You can configure Firebase later in src/lib/firebase.ts.")
        return None

    print_success("Firebase configuration validated.")
    return config


def _collect_admin(project_id: str) -> FirebaseAdminConfig | None:
    method = Prompt.ask(
        "How would you like to provide the Firebase Admin credentials?",
        choices=["paste", "manual", "skip"],
        default="paste",
        console=console,
    )
    if method == "skip":
        return None

    try:
        if method == "paste":
            text = Prompt.ask(
                "Paste your service account JSON (Project Settings > Service Accounts)",
                console=console,
            )
            config = parse_admin_config(text)
        else:
            values = {
                "projectId": Prompt.ask("Project ID", default=project_id, console=console),
                "clientEmail": Prompt.ask("Service Account Email", default="", console=console),
                "privateKey": Prompt.ask(
                    "Private Key (including the BEGIN/END lines)", default="", console=console
                ),
            }
            try:
                config = FirebaseAdminConfig.model_validate(values)
            except ValidationError as exc:
                raise ConfigValidationError(_validation_message(exc)) from exc
    except ConfigValidationError as exc:
        print_error(f"{exc}. You can add the credentials to .env later.")
        return None

    print_success("Firebase Admin configuration validated.")
    return config


def collect_firebase_config() -> tuple[FirebaseClientConfig | None, FirebaseAdminConfig | None]:
    """Ask the user for Firebase client and admin configuration.

    Every step can be skipped.  Invalid input is reported and treated as
    skipped, so this never raises for bad configuration.
    """
    if not Confirm.ask(
        "Would you like to configure Firebase now? (You can do this later)",
        default=True,
        console=console,
    ):
        return None, None

    client = _collect_client()
    if client is None:
        return None, None

    admin = None
    if Confirm.ask(
        "Configure the Firebase Admin SDK now? (Required for server-side operations)",
        default=True,
        console=console,
    ):
        admin = _collect_admin(client.project_id)
    return client, admin


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

FIREBASE_CLIENT_TEMPLATE = """\
import { getApp, getApps, initializeApp } from "firebase/app";
import { getAuth } from "firebase/auth";
import { getFirestore } from "firebase/firestore";
import { getStorage } from "firebase/storage";

const firebaseConfig = {
  apiKey: "{{ client.api_key }}",
  authDomain: "{{ client.auth_domain }}",
  projectId: "{{ client.project_id }}",
  storageBucket: "{{ client.storage_bucket }}",
  messagingSenderId: "{{ client.messaging_sender_id }}",
  appId: "{{ client.app_id }}",
};

const app = getApps().length === 0 ? initializeApp(firebaseConfig) : getApp();

export const auth = getAuth(app);
export const db = getFirestore(app);
export const storage = getStorage(app);

export default app;
"""


def _admin_body(admin: FirebaseAdminConfig) -> str:
    # Env files are line based: the key's newlines are stored escaped.
    private_key = admin.private_key.replace("\r\n", "\n").replace("\n", "\\n")
    return "\n".join(
        [
            format_assignment("FIREBASE_PROJECT_ID", admin.project_id),
            format_assignment("FIREBASE_CLIENT_EMAIL", admin.client_email),
            format_assignment("FIREBASE_PRIVATE_KEY", private_key),
        ]
    )


def write_firebase_config(
    project_dir: str | Path,
    client: FirebaseClientConfig | None,
    admin: FirebaseAdminConfig | None,
    renderer: TemplateRenderer | None = None,
) -> list[Path]:
    """Write collected configuration into the project.

    * client -> ``src/lib/firebase.ts`` and the default project in
      ``.firebaserc``.
    * admin -> the ``# Firebase Admin SDK`` block of ``.env`` (real values)
      and ``.env.example`` (placeholders).

    Returns:
        The files that were written.
    """
    project_dir = Path(project_dir)
    written: list[Path] = []

    if client is not None:
        renderer = renderer or TemplateRenderer()
        content = renderer.render_string(FIREBASE_CLIENT_TEMPLATE, {"client": client})
        written.append(write_file(project_dir / "src" / "lib" / "firebase.ts", content))

        firebaserc = project_dir / ".firebaserc"
        merge_json(firebaserc, {"projects": {"default": client.project_id}})
        written.append(firebaserc)

    if admin is not None:
        env_path = project_dir / ".env"
        example_path = project_dir / ".env.example"
        merge_env_block(env_path, FIREBASE_ADMIN_HEADER, _admin_body(admin))
        merge_env_block(example_path, FIREBASE_ADMIN_HEADER, admin_placeholder_body())
        written += [env_path, example_path]

    return written
