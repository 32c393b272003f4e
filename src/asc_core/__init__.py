"""App Store Connect core - authentication and API request client.

Modules:
- config: Environment-backed settings
- errors: Error taxonomy raised by the core
- auth: Credential loading and ES256 token generation
- client: Authenticated, paginating App Store Connect request client
"""

__version__ = "0.1.0"
