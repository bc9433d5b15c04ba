from licensekey.testing_utils import (  # noqa: F401
    fixed_keypair,
    other_keypair,
    recording_backend,
)
