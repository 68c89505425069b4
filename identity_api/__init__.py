"""Identity API Flask Application Package.

To use the Flask app:
    from identity_api.flask_app import create_app

To use the directory services without Flask:
    from identity_api.core.okta import OktaClient
    from identity_api.core.directory import DirectoryService
"""
# Note: We don't import flask_app by default so the core can be used
# without pulling in Flask
