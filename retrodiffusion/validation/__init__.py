"""Local request validation package.

Scope:
    Runs before any network dispatch so malformed requests fail closed.

Module split:
    - `base64_guard`: well-formedness checks and data-URL normalization for
      `input_image` / `input_palette` payloads.
    - `rules`: ordered chain of pure field/cross-field rules with first-failure
      short-circuit semantics.
"""
