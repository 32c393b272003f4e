"""MCP tool definitions for App Store Connect.

This module provides the definitive list of tools exposed by the server.
Every tool here has a matching handler in ``handlers.HANDLERS``.
"""

from mcp.types import Tool

PLATFORMS = ["IOS", "MAC_OS", "TV_OS", "VISION_OS"]
BUNDLE_ID_PLATFORMS = ["IOS", "MAC_OS", "UNIVERSAL"]
RELEASE_TYPES = ["MANUAL", "AFTER_APPROVAL", "SCHEDULED"]

LIMIT_PROPERTY = {
    "type": "integer",
    "minimum": 1,
    "maximum": 200,
    "description": "Number of items per page (max 200)"
}
ALL_PAGES_PROPERTY = {
    "type": "boolean",
    "description": "Follow pagination links and return every page (up to 10 pages)"
}


def get_tools() -> list[Tool]:
    """Get the list of all MCP tools for App Store Connect."""
    return [
        # ============================================================================
        # App Tools
        # ============================================================================
        Tool(
            name="list_apps",
            description="List all apps in App Store Connect. Returns app ID, name, bundle ID, SKU, and platform.",
            inputSchema={
                "type": "object",
                "properties": {
                    "limit": LIMIT_PROPERTY,
                    "filter_bundleId": {
                        "type": "string",
                        "description": "Filter by bundle ID (e.g., com.example.app)"
                    },
                    "filter_name": {
                        "type": "string",
                        "description": "Filter by app name"
                    },
                    "include": {
                        "type": "string",
                        "description": "Comma-separated related resources to include "
                                       "(e.g., appStoreVersions,builds,betaGroups)"
                    },
                    "all_pages": ALL_PAGES_PROPERTY
                }
            }
        ),
        Tool(
            name="get_app",
            description="Get detailed info for a specific app by its App Store Connect ID. "
                       "Supports includes for related resources.",
            inputSchema={
                "type": "object",
                "properties": {
                    "app_id": {
                        "type": "string",
                        "description": "The App Store Connect app ID"
                    },
                    "include": {
                        "type": "string",
                        "description": "Comma-separated related resources to include "
                                       "(e.g., appStoreVersions,builds,betaGroups,appInfos)"
                    },
                    "fields_apps": {
                        "type": "string",
                        "description": "Comma-separated fields to return for apps "
                                       "(e.g., name,bundleId,sku,primaryLocale)"
                    }
                },
                "required": ["app_id"]
            }
        ),
        Tool(
            name="create_app",
            description="Create a new app in App Store Connect.",
            inputSchema={
                "type": "object",
                "properties": {
                    "name": {
                        "type": "string",
                        "description": "The name of the app"
                    },
                    "bundleId": {
                        "type": "string",
                        "description": "The bundle ID (must match a registered bundle ID)"
                    },
                    "sku": {
                        "type": "string",
                        "description": "A unique SKU for the app"
                    },
                    "primaryLocale": {
                        "type": "string",
                        "default": "en-US",
                        "description": "Primary locale (default: en-US)"
                    },
                    "bundleId_resource_id": {
                        "type": "string",
                        "description": "The App Store Connect ID of the registered bundle ID resource"
                    }
                },
                "required": ["name", "bundleId", "sku", "bundleId_resource_id"]
            }
        ),
        # ============================================================================
        # App Store Version Tools
        # ============================================================================
        Tool(
            name="list_app_store_versions",
            description="List all App Store versions for an app. Includes version string, state, and platform.",
            inputSchema={
                "type": "object",
                "properties": {
                    "app_id": {
                        "type": "string",
                        "description": "The App Store Connect app ID"
                    },
                    "filter_versionString": {
                        "type": "string",
                        "description": "Filter by version string (e.g., 1.0.0)"
                    },
                    "filter_platform": {
                        "type": "string",
                        "enum": PLATFORMS,
                        "description": "Filter by platform"
                    },
                    "filter_appStoreState": {
                        "type": "string",
                        "description": "Filter by state (e.g., READY_FOR_SALE, PREPARE_FOR_SUBMISSION, "
                                       "WAITING_FOR_REVIEW)"
                    },
                    "include": {
                        "type": "string",
                        "description": "Comma-separated includes "
                                       "(e.g., appStoreVersionLocalizations,build,appStoreVersionSubmission)"
                    },
                    "limit": LIMIT_PROPERTY,
                    "all_pages": ALL_PAGES_PROPERTY
                },
                "required": ["app_id"]
            }
        ),
        Tool(
            name="create_app_store_version",
            description="Create a new App Store version for an app.",
            inputSchema={
                "type": "object",
                "properties": {
                    "app_id": {
                        "type": "string",
                        "description": "The App Store Connect app ID"
                    },
                    "versionString": {
                        "type": "string",
                        "description": "The version string (e.g., 1.2.0)"
                    },
                    "platform": {
                        "type": "string",
                        "enum": PLATFORMS,
                        "description": "The platform"
                    },
                    "releaseType": {
                        "type": "string",
                        "enum": RELEASE_TYPES,
                        "default": "AFTER_APPROVAL",
                        "description": "Release type (default: AFTER_APPROVAL)"
                    },
                    "copyright": {
                        "type": "string",
                        "description": "Copyright text"
                    },
                    "earliestReleaseDate": {
                        "type": "string",
                        "description": "Earliest release date (ISO 8601), only for SCHEDULED release type"
                    }
                },
                "required": ["app_id", "versionString", "platform"]
            }
        ),
        Tool(
            name="update_app_store_version",
            description="Update an existing App Store version "
                       "(e.g., change version string, copyright, release type).",
            inputSchema={
                "type": "object",
                "properties": {
                    "version_id": {
                        "type": "string",
                        "description": "The App Store version ID"
                    },
                    "versionString": {
                        "type": "string",
                        "description": "New version string"
                    },
                    "copyright": {
                        "type": "string",
                        "description": "Copyright text"
                    },
                    "releaseType": {
                        "type": "string",
                        "enum": RELEASE_TYPES,
                        "description": "Release type"
                    },
                    "earliestReleaseDate": {
                        "type": "string",
                        "description": "Earliest release date (ISO 8601)"
                    }
                },
                "required": ["version_id"]
            }
        ),
        # ============================================================================
        # Localization Tools
        # ============================================================================
        Tool(
            name="list_version_localizations",
            description="List all localizations for an App Store version. Returns description, keywords, "
                       "whatsNew, promotional text, etc. for each locale.",
            inputSchema={
                "type": "object",
                "properties": {
                    "version_id": {
                        "type": "string",
                        "description": "The App Store version ID"
                    },
                    "limit": LIMIT_PROPERTY
                },
                "required": ["version_id"]
            }
        ),
        Tool(
            name="get_version_localization",
            description="Get a specific version localization by ID. Returns all localization fields.",
            inputSchema={
                "type": "object",
                "properties": {
                    "localization_id": {
                        "type": "string",
                        "description": "The localization ID"
                    }
                },
                "required": ["localization_id"]
            }
        ),
        Tool(
            name="create_version_localization",
            description="Create a new localization for an App Store version. "
                       "Use this to add a new locale (e.g., fr-FR, de-DE).",
            inputSchema={
                "type": "object",
                "properties": {
                    "version_id": {
                        "type": "string",
                        "description": "The App Store version ID"
                    },
                    "locale": {
                        "type": "string",
                        "description": "Locale code (e.g., en-US, fr-FR, de-DE, ja)"
                    },
                    "description": {
                        "type": "string",
                        "description": "App description for this locale"
                    },
                    "keywords": {
                        "type": "string",
                        "description": "Comma-separated keywords (max 100 chars)"
                    },
                    "whatsNew": {
                        "type": "string",
                        "description": "What's new in this version (release notes)"
                    },
                    "promotionalText": {
                        "type": "string",
                        "description": "Promotional text (can be updated without a new version)"
                    },
                    "marketingUrl": {
                        "type": "string",
                        "description": "Marketing URL"
                    },
                    "supportUrl": {
                        "type": "string",
                        "description": "Support URL"
                    }
                },
                "required": ["version_id", "locale"]
            }
        ),
        Tool(
            name="update_version_localization",
            description="Update an existing version localization. Use this to set or change description, "
                       "keywords, whatsNew, promotional text, URLs.",
            inputSchema={
                "type": "object",
                "properties": {
                    "localization_id": {
                        "type": "string",
                        "description": "The localization ID"
                    },
                    "description": {
                        "type": "string",
                        "description": "App description"
                    },
                    "keywords": {
                        "type": "string",
                        "description": "Comma-separated keywords (max 100 chars)"
                    },
                    "whatsNew": {
                        "type": "string",
                        "description": "What's new text (release notes)"
                    },
                    "promotionalText": {
                        "type": "string",
                        "description": "Promotional text"
                    },
                    "marketingUrl": {
                        "type": "string",
                        "description": "Marketing URL"
                    },
                    "supportUrl": {
                        "type": "string",
                        "description": "Support URL"
                    }
                },
                "required": ["localization_id"]
            }
        ),
        # ============================================================================
        # Beta / TestFlight Tools
        # ============================================================================
        Tool(
            name="list_beta_groups",
            description="List TestFlight beta groups, optionally for a single app.",
            inputSchema={
                "type": "object",
                "properties": {
                    "app_id": {
                        "type": "string",
                        "description": "Only return beta groups of this app"
                    },
                    "filter_name": {
                        "type": "string",
                        "description": "Filter by beta group name"
                    },
                    "include": {
                        "type": "string",
                        "description": "Comma-separated includes (e.g., app,betaTesters,builds)"
                    },
                    "limit": LIMIT_PROPERTY,
                    "all_pages": ALL_PAGES_PROPERTY
                }
            }
        ),
        Tool(
            name="create_beta_group",
            description="Create a TestFlight beta group for an app.",
            inputSchema={
                "type": "object",
                "properties": {
                    "app_id": {
                        "type": "string",
                        "description": "The App Store Connect app ID"
                    },
                    "name": {
                        "type": "string",
                        "description": "The beta group name"
                    },
                    "publicLinkEnabled": {
                        "type": "boolean",
                        "description": "Enable a public TestFlight link"
                    },
                    "publicLinkLimit": {
                        "type": "integer",
                        "minimum": 1,
                        "maximum": 10000,
                        "description": "Maximum number of testers joining through the public link"
                    },
                    "publicLinkLimitEnabled": {
                        "type": "boolean",
                        "description": "Enforce the public link tester limit"
                    },
                    "feedbackEnabled": {
                        "type": "boolean",
                        "description": "Allow testers to send feedback"
                    }
                },
                "required": ["app_id", "name"]
            }
        ),
        Tool(
            name="delete_beta_group",
            description="Delete a TestFlight beta group.",
            inputSchema={
                "type": "object",
                "properties": {
                    "beta_group_id": {
                        "type": "string",
                        "description": "The beta group ID"
                    }
                },
                "required": ["beta_group_id"]
            }
        ),
        Tool(
            name="list_beta_testers",
            description="List TestFlight beta testers.",
            inputSchema={
                "type": "object",
                "properties": {
                    "filter_email": {
                        "type": "string",
                        "description": "Filter by tester email"
                    },
                    "filter_betaGroups": {
                        "type": "string",
                        "description": "Comma-separated beta group IDs"
                    },
                    "filter_apps": {
                        "type": "string",
                        "description": "Comma-separated app IDs"
                    },
                    "include": {
                        "type": "string",
                        "description": "Comma-separated includes (e.g., apps,betaGroups,builds)"
                    },
                    "limit": LIMIT_PROPERTY,
                    "all_pages": ALL_PAGES_PROPERTY
                }
            }
        ),
        Tool(
            name="create_beta_tester",
            description="Create a TestFlight beta tester and optionally add them to beta groups.",
            inputSchema={
                "type": "object",
                "properties": {
                    "email": {
                        "type": "string",
                        "description": "The tester's email address"
                    },
                    "firstName": {
                        "type": "string",
                        "description": "The tester's first name"
                    },
                    "lastName": {
                        "type": "string",
                        "description": "The tester's last name"
                    },
                    "beta_group_ids": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Beta group IDs to add the tester to"
                    }
                },
                "required": ["email"]
            }
        ),
        Tool(
            name="delete_beta_tester",
            description="Remove a beta tester from all apps and groups.",
            inputSchema={
                "type": "object",
                "properties": {
                    "beta_tester_id": {
                        "type": "string",
                        "description": "The beta tester ID"
                    }
                },
                "required": ["beta_tester_id"]
            }
        ),
        Tool(
            name="add_tester_to_beta_group",
            description="Add existing beta testers to a beta group.",
            inputSchema={
                "type": "object",
                "properties": {
                    "beta_group_id": {
                        "type": "string",
                        "description": "The beta group ID"
                    },
                    "tester_ids": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Beta tester IDs to add"
                    }
                },
                "required": ["beta_group_id", "tester_ids"]
            }
        ),
        Tool(
            name="remove_tester_from_beta_group",
            description="Remove beta testers from a beta group.",
            inputSchema={
                "type": "object",
                "properties": {
                    "beta_group_id": {
                        "type": "string",
                        "description": "The beta group ID"
                    },
                    "tester_ids": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Beta tester IDs to remove"
                    }
                },
                "required": ["beta_group_id", "tester_ids"]
            }
        ),
        # ============================================================================
        # Build Tools
        # ============================================================================
        Tool(
            name="list_builds",
            description="List builds for an app. Returns build number, version, processing state, "
                       "and upload date.",
            inputSchema={
                "type": "object",
                "properties": {
                    "app_id": {
                        "type": "string",
                        "description": "The App Store Connect app ID"
                    },
                    "filter_version": {
                        "type": "string",
                        "description": "Filter by version string"
                    },
                    "filter_processingState": {
                        "type": "string",
                        "enum": ["PROCESSING", "FAILED", "INVALID", "VALID"],
                        "description": "Filter by processing state"
                    },
                    "filter_expired": {
                        "type": "boolean",
                        "description": "Filter by expired status"
                    },
                    "include": {
                        "type": "string",
                        "description": "Comma-separated includes "
                                       "(e.g., app,betaAppReviewSubmission,buildBetaDetail,preReleaseVersion)"
                    },
                    "sort": {
                        "type": "string",
                        "description": "Sort field (e.g., -uploadedDate for newest first, "
                                       "uploadedDate for oldest first)"
                    },
                    "limit": LIMIT_PROPERTY,
                    "all_pages": ALL_PAGES_PROPERTY
                },
                "required": ["app_id"]
            }
        ),
        Tool(
            name="add_build_to_beta_group",
            description="Add a build to a beta group for TestFlight distribution.",
            inputSchema={
                "type": "object",
                "properties": {
                    "beta_group_id": {
                        "type": "string",
                        "description": "The beta group ID"
                    },
                    "build_ids": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Array of build IDs to add"
                    }
                },
                "required": ["beta_group_id", "build_ids"]
            }
        ),
        # ============================================================================
        # Bundle ID Tools
        # ============================================================================
        Tool(
            name="list_bundle_ids",
            description="List registered bundle IDs in App Store Connect.",
            inputSchema={
                "type": "object",
                "properties": {
                    "filter_identifier": {
                        "type": "string",
                        "description": "Filter by bundle identifier (e.g., com.example.*)"
                    },
                    "filter_name": {
                        "type": "string",
                        "description": "Filter by name"
                    },
                    "filter_platform": {
                        "type": "string",
                        "enum": BUNDLE_ID_PLATFORMS,
                        "description": "Filter by platform"
                    },
                    "include": {
                        "type": "string",
                        "description": "Comma-separated includes (e.g., bundleIdCapabilities,profiles,app)"
                    },
                    "limit": LIMIT_PROPERTY,
                    "all_pages": ALL_PAGES_PROPERTY
                }
            }
        ),
        Tool(
            name="register_bundle_id",
            description="Register a new bundle ID in App Store Connect.",
            inputSchema={
                "type": "object",
                "properties": {
                    "name": {
                        "type": "string",
                        "description": "A descriptive name for the bundle ID"
                    },
                    "identifier": {
                        "type": "string",
                        "description": "The bundle identifier (e.g., com.example.myapp)"
                    },
                    "platform": {
                        "type": "string",
                        "enum": BUNDLE_ID_PLATFORMS,
                        "description": "The platform"
                    }
                },
                "required": ["name", "identifier", "platform"]
            }
        ),
        # ============================================================================
        # Capability Tools
        # ============================================================================
        Tool(
            name="list_bundle_id_capabilities",
            description="List capabilities enabled for a bundle ID.",
            inputSchema={
                "type": "object",
                "properties": {
                    "bundle_id": {
                        "type": "string",
                        "description": "The bundle ID resource ID"
                    },
                    "limit": LIMIT_PROPERTY
                },
                "required": ["bundle_id"]
            }
        ),
        Tool(
            name="enable_bundle_id_capability",
            description="Enable a capability for a bundle ID (e.g., push notifications, sign in with Apple).",
            inputSchema={
                "type": "object",
                "properties": {
                    "bundle_id": {
                        "type": "string",
                        "description": "The bundle ID resource ID"
                    },
                    "capabilityType": {
                        "type": "string",
                        "description": "Capability type (e.g., PUSH_NOTIFICATIONS, SIGN_IN_WITH_APPLE, "
                                       "ASSOCIATED_DOMAINS, IN_APP_PURCHASE, GAME_CENTER)"
                    }
                },
                "required": ["bundle_id", "capabilityType"]
            }
        ),
        Tool(
            name="disable_bundle_id_capability",
            description="Disable (delete) a capability from a bundle ID.",
            inputSchema={
                "type": "object",
                "properties": {
                    "capability_id": {
                        "type": "string",
                        "description": "The capability ID to disable"
                    }
                },
                "required": ["capability_id"]
            }
        ),
        # ============================================================================
        # Submission Tools
        # ============================================================================
        Tool(
            name="create_app_store_version_submission",
            description="Submit an App Store version for review.",
            inputSchema={
                "type": "object",
                "properties": {
                    "version_id": {
                        "type": "string",
                        "description": "The App Store version ID to submit"
                    }
                },
                "required": ["version_id"]
            }
        ),
        # ============================================================================
        # User and Device Tools
        # ============================================================================
        Tool(
            name="list_users",
            description="List users in your App Store Connect team.",
            inputSchema={
                "type": "object",
                "properties": {
                    "filter_roles": {
                        "type": "string",
                        "description": "Comma-separated roles to filter by (e.g., ADMIN,APP_MANAGER,DEVELOPER)"
                    },
                    "filter_username": {
                        "type": "string",
                        "description": "Filter by username (email)"
                    },
                    "include": {
                        "type": "string",
                        "description": "Comma-separated includes (e.g., visibleApps)"
                    },
                    "limit": LIMIT_PROPERTY,
                    "all_pages": ALL_PAGES_PROPERTY
                }
            }
        ),
        Tool(
            name="list_devices",
            description="List registered devices.",
            inputSchema={
                "type": "object",
                "properties": {
                    "filter_name": {
                        "type": "string",
                        "description": "Filter by device name"
                    },
                    "filter_platform": {
                        "type": "string",
                        "enum": ["IOS", "MAC_OS"],
                        "description": "Filter by platform"
                    },
                    "filter_status": {
                        "type": "string",
                        "enum": ["ENABLED", "DISABLED"],
                        "description": "Filter by status"
                    },
                    "filter_udid": {
                        "type": "string",
                        "description": "Filter by UDID"
                    },
                    "limit": LIMIT_PROPERTY,
                    "all_pages": ALL_PAGES_PROPERTY
                }
            }
        ),
        # ============================================================================
        # Generic Tools
        # ============================================================================
        Tool(
            name="api_request",
            description="Make an arbitrary request to the App Store Connect API. Use this for any endpoint "
                       "not covered by a dedicated tool.\n"
                       "Base URL is https://api.appstoreconnect.apple.com, so just provide the path "
                       "(e.g., /v1/apps, /v2/inAppPurchases).\n"
                       "Auth is handled automatically. See "
                       "https://developer.apple.com/documentation/appstoreconnectapi for full API docs.",
            inputSchema={
                "type": "object",
                "properties": {
                    "method": {
                        "type": "string",
                        "enum": ["GET", "POST", "PATCH", "DELETE"],
                        "description": "HTTP method"
                    },
                    "path": {
                        "type": "string",
                        "description": "API path (e.g., /v1/apps, /v1/apps/{id}/appStoreVersions, "
                                       "/v2/inAppPurchases)"
                    },
                    "params": {
                        "type": "object",
                        "additionalProperties": {"type": "string"},
                        "description": "Query parameters as key-value pairs (e.g., "
                                       "{\"filter[bundleId]\": \"com.example.app\", "
                                       "\"include\": \"appStoreVersions\", \"limit\": \"10\"})"
                    },
                    "body": {
                        "type": "string",
                        "description": "Request body as a JSON string for POST/PATCH requests. "
                                       "Must follow the JSON:API format used by App Store Connect."
                    },
                    "all_pages": {
                        "type": "boolean",
                        "description": "For GET requests, follow pagination links and return every page "
                                       "(up to 10 pages)"
                    }
                },
                "required": ["method", "path"]
            }
        ),
    ]
