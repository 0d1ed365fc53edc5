"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Supported formats, CORS defaults, markup tree keys
- exceptions: Conversion error taxonomy
- ingress: Request body and data URL decoding
- http: Method routing and response envelopes
"""
