"""Request preparation pipeline.

  - credentials.refresh_headers()   - credential lookup + header composition
  - url_builder.build_url()         - https://{service}.{env}.in/api/...
  - dispatcher.make_request()       - transport call + response normalization
"""
