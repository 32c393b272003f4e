"""MCP tool handlers for App Store Connect.

All handlers follow a consistent pattern:
- Accept: arguments dict and an AppStoreConnectClient
- Map the arguments onto one JSON:API request (method, path, body, query params)
- Return: list[TextContent] with the response document rendered as JSON,
  or a success acknowledgment for operations that return no content

Errors raised by the client propagate; the server turns them into tool output.
"""
import json
import logging
from typing import Any, Awaitable, Callable, Optional

from mcp.types import TextContent

from asc_core.client import AppStoreConnectClient

from . import formatters

logger = logging.getLogger("asc-mcp.handlers")

Handler = Callable[[dict, AppStoreConnectClient], Awaitable[list[TextContent]]]


# ============================================================================
# Request shaping helpers
# ============================================================================

def _query_params(arguments: dict, mapping: dict[str, str]) -> dict[str, str]:
    """Translate tool arguments into App Store Connect query parameters.

    ``mapping`` goes from argument name to query parameter name
    (e.g. ``filter_name`` -> ``filter[name]``). Unset arguments are skipped.
    """
    params = {}
    for arg_name, param_name in mapping.items():
        value = arguments.get(arg_name)
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        params[param_name] = str(value)
    return params


def _attributes(arguments: dict, names: list[str]) -> dict[str, Any]:
    """Pick the supplied resource attributes out of the tool arguments."""
    return {name: arguments[name] for name in names if arguments.get(name) is not None}


def _relationship(resource_type: str, resource_id: str) -> dict:
    return {"data": {"type": resource_type, "id": resource_id}}


def _linkages(resource_type: str, ids: list[str]) -> dict:
    return {"data": [{"type": resource_type, "id": resource_id} for resource_id in ids]}


async def _get_collection(
    client: AppStoreConnectClient,
    path: str,
    params: dict[str, str],
    arguments: dict,
) -> dict:
    """GET a collection, walking every page when the agent asked for all_pages."""
    if not arguments.get("all_pages"):
        return await client.request("GET", path, None, params)

    response = await client.request_all_pages(path, params)
    paging = response["meta"]["paging"]
    if paging.get("truncated"):
        logger.warning(f"Stopped paginating {path} at the page cap with {paging['total']} items")
    return response


def _rendered(response: dict) -> list[TextContent]:
    return formatters.text_content(formatters.format_response(response))


def _acknowledged(message: str) -> list[TextContent]:
    return formatters.text_content(formatters.format_success(message))


# ============================================================================
# App Handlers
# ============================================================================

async def handle_list_apps(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """List all apps in App Store Connect."""
    params = _query_params(arguments, {
        "limit": "limit",
        "filter_bundleId": "filter[bundleId]",
        "filter_name": "filter[name]",
        "include": "include",
    })
    response = await _get_collection(client, "/v1/apps", params, arguments)
    return _rendered(response)


async def handle_get_app(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """Get a single app by its App Store Connect ID."""
    app_id = arguments["app_id"]
    params = _query_params(arguments, {
        "include": "include",
        "fields_apps": "fields[apps]",
    })
    response = await client.request("GET", f"/v1/apps/{app_id}", None, params)
    return _rendered(response)


async def handle_create_app(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """Create a new app linked to a registered bundle ID."""
    body = {
        "data": {
            "type": "apps",
            "attributes": {
                "name": arguments["name"],
                "sku": arguments["sku"],
                "primaryLocale": arguments.get("primaryLocale") or "en-US",
                "bundleId": arguments["bundleId"],
            },
            "relationships": {
                "bundleId": _relationship("bundleIds", arguments["bundleId_resource_id"]),
            },
        }
    }
    response = await client.request("POST", "/v1/apps", body)
    logger.info(f"Created app {arguments['name']} ({arguments['bundleId']})")
    return _rendered(response)


# ============================================================================
# App Store Version Handlers
# ============================================================================

async def handle_list_app_store_versions(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """List App Store versions for an app."""
    app_id = arguments["app_id"]
    params = _query_params(arguments, {
        "filter_versionString": "filter[versionString]",
        "filter_platform": "filter[platform]",
        "filter_appStoreState": "filter[appStoreState]",
        "include": "include",
        "limit": "limit",
    })
    response = await _get_collection(client, f"/v1/apps/{app_id}/appStoreVersions", params, arguments)
    return _rendered(response)


async def handle_create_app_store_version(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """Create a new App Store version.

    Release type defaults to AFTER_APPROVAL; earliestReleaseDate only matters
    for SCHEDULED releases.
    """
    attributes = {
        "versionString": arguments["versionString"],
        "platform": arguments["platform"],
        "releaseType": arguments.get("releaseType") or "AFTER_APPROVAL",
    }
    attributes.update(_attributes(arguments, ["copyright", "earliestReleaseDate"]))

    body = {
        "data": {
            "type": "appStoreVersions",
            "attributes": attributes,
            "relationships": {
                "app": _relationship("apps", arguments["app_id"]),
            },
        }
    }
    response = await client.request("POST", "/v1/appStoreVersions", body)
    logger.info(f"Created version {arguments['versionString']} for app {arguments['app_id']}")
    return _rendered(response)


async def handle_update_app_store_version(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """Update an App Store version. Only supplied attributes are sent."""
    version_id = arguments["version_id"]
    body = {
        "data": {
            "type": "appStoreVersions",
            "id": version_id,
            "attributes": _attributes(
                arguments, ["versionString", "copyright", "releaseType", "earliestReleaseDate"]
            ),
        }
    }
    response = await client.request("PATCH", f"/v1/appStoreVersions/{version_id}", body)
    return _rendered(response)


# ============================================================================
# Localization Handlers
# ============================================================================

LOCALIZATION_FIELDS = [
    "description",
    "keywords",
    "whatsNew",
    "promotionalText",
    "marketingUrl",
    "supportUrl",
]


async def handle_list_version_localizations(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """List all localizations of an App Store version."""
    version_id = arguments["version_id"]
    params = _query_params(arguments, {"limit": "limit"})
    response = await client.request(
        "GET", f"/v1/appStoreVersions/{version_id}/appStoreVersionLocalizations", None, params
    )
    return _rendered(response)


async def handle_get_version_localization(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """Get a single version localization."""
    localization_id = arguments["localization_id"]
    response = await client.request("GET", f"/v1/appStoreVersionLocalizations/{localization_id}")
    return _rendered(response)


async def handle_create_version_localization(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """Add a locale to an App Store version."""
    attributes = {"locale": arguments["locale"]}
    attributes.update(_attributes(arguments, LOCALIZATION_FIELDS))

    body = {
        "data": {
            "type": "appStoreVersionLocalizations",
            "attributes": attributes,
            "relationships": {
                "appStoreVersion": _relationship("appStoreVersions", arguments["version_id"]),
            },
        }
    }
    response = await client.request("POST", "/v1/appStoreVersionLocalizations", body)
    logger.info(f"Created {arguments['locale']} localization for version {arguments['version_id']}")
    return _rendered(response)


async def handle_update_version_localization(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """Update a version localization. Only supplied fields are sent."""
    localization_id = arguments["localization_id"]
    body = {
        "data": {
            "type": "appStoreVersionLocalizations",
            "id": localization_id,
            "attributes": _attributes(arguments, LOCALIZATION_FIELDS),
        }
    }
    response = await client.request(
        "PATCH", f"/v1/appStoreVersionLocalizations/{localization_id}", body
    )
    return _rendered(response)


# ============================================================================
# Beta / TestFlight Handlers
# ============================================================================

async def handle_list_beta_groups(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """List TestFlight beta groups."""
    params = _query_params(arguments, {
        "app_id": "filter[app]",
        "filter_name": "filter[name]",
        "include": "include",
        "limit": "limit",
    })
    response = await _get_collection(client, "/v1/betaGroups", params, arguments)
    return _rendered(response)


async def handle_create_beta_group(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """Create a TestFlight beta group for an app."""
    attributes = {"name": arguments["name"]}
    attributes.update(_attributes(
        arguments,
        ["publicLinkEnabled", "publicLinkLimit", "publicLinkLimitEnabled", "feedbackEnabled"],
    ))

    body = {
        "data": {
            "type": "betaGroups",
            "attributes": attributes,
            "relationships": {
                "app": _relationship("apps", arguments["app_id"]),
            },
        }
    }
    response = await client.request("POST", "/v1/betaGroups", body)
    logger.info(f"Created beta group {arguments['name']} for app {arguments['app_id']}")
    return _rendered(response)


async def handle_delete_beta_group(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """Delete a TestFlight beta group."""
    beta_group_id = arguments["beta_group_id"]
    await client.request("DELETE", f"/v1/betaGroups/{beta_group_id}")
    logger.info(f"Deleted beta group {beta_group_id}")
    return _acknowledged(f"Beta group {beta_group_id} deleted")


async def handle_list_beta_testers(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """List TestFlight beta testers."""
    params = _query_params(arguments, {
        "filter_email": "filter[email]",
        "filter_betaGroups": "filter[betaGroups]",
        "filter_apps": "filter[apps]",
        "include": "include",
        "limit": "limit",
    })
    response = await _get_collection(client, "/v1/betaTesters", params, arguments)
    return _rendered(response)


async def handle_create_beta_tester(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """Create a beta tester, optionally placing them in beta groups."""
    attributes = {"email": arguments["email"]}
    attributes.update(_attributes(arguments, ["firstName", "lastName"]))

    data: dict = {"type": "betaTesters", "attributes": attributes}
    beta_group_ids = arguments.get("beta_group_ids")
    if beta_group_ids:
        data["relationships"] = {"betaGroups": _linkages("betaGroups", beta_group_ids)}

    response = await client.request("POST", "/v1/betaTesters", {"data": data})
    logger.info(f"Created beta tester {arguments['email']}")
    return _rendered(response)


async def handle_delete_beta_tester(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """Delete a beta tester."""
    beta_tester_id = arguments["beta_tester_id"]
    await client.request("DELETE", f"/v1/betaTesters/{beta_tester_id}")
    logger.info(f"Deleted beta tester {beta_tester_id}")
    return _acknowledged(f"Beta tester {beta_tester_id} deleted")


async def handle_add_tester_to_beta_group(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """Add beta testers to a beta group."""
    beta_group_id = arguments["beta_group_id"]
    tester_ids = arguments["tester_ids"]
    await client.request(
        "POST",
        f"/v1/betaGroups/{beta_group_id}/relationships/betaTesters",
        _linkages("betaTesters", tester_ids),
    )
    return _acknowledged(f"Added {len(tester_ids)} tester(s) to beta group {beta_group_id}")


async def handle_remove_tester_from_beta_group(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """Remove beta testers from a beta group."""
    beta_group_id = arguments["beta_group_id"]
    tester_ids = arguments["tester_ids"]
    await client.request(
        "DELETE",
        f"/v1/betaGroups/{beta_group_id}/relationships/betaTesters",
        _linkages("betaTesters", tester_ids),
    )
    return _acknowledged(f"Removed {len(tester_ids)} tester(s) from beta group {beta_group_id}")


# ============================================================================
# Build Handlers
# ============================================================================

async def handle_list_builds(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """List builds for an app."""
    params = _query_params(arguments, {
        "app_id": "filter[app]",
        "filter_version": "filter[version]",
        "filter_processingState": "filter[processingState]",
        "filter_expired": "filter[expired]",
        "include": "include",
        "sort": "sort",
        "limit": "limit",
    })
    response = await _get_collection(client, "/v1/builds", params, arguments)
    return _rendered(response)


async def handle_add_build_to_beta_group(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """Make builds available to a beta group."""
    beta_group_id = arguments["beta_group_id"]
    build_ids = arguments["build_ids"]
    await client.request(
        "POST",
        f"/v1/betaGroups/{beta_group_id}/relationships/builds",
        _linkages("builds", build_ids),
    )
    return _acknowledged(f"Added {len(build_ids)} build(s) to beta group {beta_group_id}")


# ============================================================================
# Bundle ID Handlers
# ============================================================================

async def handle_list_bundle_ids(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """List registered bundle IDs."""
    params = _query_params(arguments, {
        "filter_identifier": "filter[identifier]",
        "filter_name": "filter[name]",
        "filter_platform": "filter[platform]",
        "include": "include",
        "limit": "limit",
    })
    response = await _get_collection(client, "/v1/bundleIds", params, arguments)
    return _rendered(response)


async def handle_register_bundle_id(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """Register a new bundle ID."""
    body = {
        "data": {
            "type": "bundleIds",
            "attributes": {
                "name": arguments["name"],
                "identifier": arguments["identifier"],
                "platform": arguments["platform"],
            },
        }
    }
    response = await client.request("POST", "/v1/bundleIds", body)
    logger.info(f"Registered bundle ID {arguments['identifier']}")
    return _rendered(response)


# ============================================================================
# Capability Handlers
# ============================================================================

async def handle_list_bundle_id_capabilities(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """List capabilities enabled for a bundle ID."""
    bundle_id = arguments["bundle_id"]
    params = _query_params(arguments, {"limit": "limit"})
    response = await client.request("GET", f"/v1/bundleIds/{bundle_id}/bundleIdCapabilities", None, params)
    return _rendered(response)


async def handle_enable_bundle_id_capability(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """Enable a capability (push notifications, sign in with Apple, ...) for a bundle ID."""
    body = {
        "data": {
            "type": "bundleIdCapabilities",
            "attributes": {
                "capabilityType": arguments["capabilityType"],
            },
            "relationships": {
                "bundleId": _relationship("bundleIds", arguments["bundle_id"]),
            },
        }
    }
    response = await client.request("POST", "/v1/bundleIdCapabilities", body)
    return _rendered(response)


async def handle_disable_bundle_id_capability(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """Disable a capability by deleting it."""
    capability_id = arguments["capability_id"]
    await client.request("DELETE", f"/v1/bundleIdCapabilities/{capability_id}")
    logger.info(f"Disabled capability {capability_id}")
    return _acknowledged(f"Capability {capability_id} disabled")


# ============================================================================
# Submission Handlers
# ============================================================================

async def handle_create_app_store_version_submission(
    arguments: dict,
    client: AppStoreConnectClient
) -> list[TextContent]:
    """Submit an App Store version for review."""
    body = {
        "data": {
            "type": "appStoreVersionSubmissions",
            "relationships": {
                "appStoreVersion": _relationship("appStoreVersions", arguments["version_id"]),
            },
        }
    }
    response = await client.request("POST", "/v1/appStoreVersionSubmissions", body)
    logger.info(f"Submitted version {arguments['version_id']} for review")
    return _rendered(response)


# ============================================================================
# User and Device Handlers
# ============================================================================

async def handle_list_users(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """List users in the App Store Connect team."""
    params = _query_params(arguments, {
        "filter_roles": "filter[roles]",
        "filter_username": "filter[username]",
        "include": "include",
        "limit": "limit",
    })
    response = await _get_collection(client, "/v1/users", params, arguments)
    return _rendered(response)


async def handle_list_devices(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """List registered devices."""
    params = _query_params(arguments, {
        "filter_name": "filter[name]",
        "filter_platform": "filter[platform]",
        "filter_status": "filter[status]",
        "filter_udid": "filter[udid]",
        "limit": "limit",
    })
    response = await _get_collection(client, "/v1/devices", params, arguments)
    return _rendered(response)


# ============================================================================
# Generic Handlers
# ============================================================================

async def handle_api_request(arguments: dict, client: AppStoreConnectClient) -> list[TextContent]:
    """Forward an arbitrary request to the App Store Connect API.

    ``body`` arrives as JSON text and is decoded before sending.
    """
    method = arguments["method"]
    path = arguments["path"]
    params: Optional[dict] = arguments.get("params")

    body = None
    if arguments.get("body"):
        try:
            body = json.loads(arguments["body"])
        except json.JSONDecodeError as e:
            raise ValueError(f"body is not valid JSON: {e}") from e

    if method == "GET" and arguments.get("all_pages"):
        response = await client.request_all_pages(path, params)
    else:
        response = await client.request(method, path, body, params)
    return _rendered(response)


HANDLERS: dict[str, Handler] = {
    # Apps
    "list_apps": handle_list_apps,
    "get_app": handle_get_app,
    "create_app": handle_create_app,
    # App Store versions
    "list_app_store_versions": handle_list_app_store_versions,
    "create_app_store_version": handle_create_app_store_version,
    "update_app_store_version": handle_update_app_store_version,
    # Localizations
    "list_version_localizations": handle_list_version_localizations,
    "get_version_localization": handle_get_version_localization,
    "create_version_localization": handle_create_version_localization,
    "update_version_localization": handle_update_version_localization,
    # Beta / TestFlight
    "list_beta_groups": handle_list_beta_groups,
    "create_beta_group": handle_create_beta_group,
    "delete_beta_group": handle_delete_beta_group,
    "list_beta_testers": handle_list_beta_testers,
    "create_beta_tester": handle_create_beta_tester,
    "delete_beta_tester": handle_delete_beta_tester,
    "add_tester_to_beta_group": handle_add_tester_to_beta_group,
    "remove_tester_from_beta_group": handle_remove_tester_from_beta_group,
    # Builds
    "list_builds": handle_list_builds,
    "add_build_to_beta_group": handle_add_build_to_beta_group,
    # Bundle IDs
    "list_bundle_ids": handle_list_bundle_ids,
    "register_bundle_id": handle_register_bundle_id,
    # Capabilities
    "list_bundle_id_capabilities": handle_list_bundle_id_capabilities,
    "enable_bundle_id_capability": handle_enable_bundle_id_capability,
    "disable_bundle_id_capability": handle_disable_bundle_id_capability,
    # Submissions
    "create_app_store_version_submission": handle_create_app_store_version_submission,
    # Users and devices
    "list_users": handle_list_users,
    "list_devices": handle_list_devices,
    # Generic
    "api_request": handle_api_request,
}
