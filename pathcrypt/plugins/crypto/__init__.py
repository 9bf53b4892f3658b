# pathcrypt/plugins/crypto/__init__.py
from __future__ import annotations

"""
Password-based path encryption commands:
- encrypt: file or directory -> <name>.enc envelopes
- decrypt: .enc envelopes -> original files
"""
