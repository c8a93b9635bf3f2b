"""Inference operation package.

Module split:
    - `types`: request dataclasses, runtime variant resolution, response models.
    - `builders`: merge/normalize/validate pipeline producing finalized payloads.
    - `namespace`: `InferencesNamespace`, the transport-bound public surface.
"""
