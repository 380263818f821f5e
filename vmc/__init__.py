"""vmc package exports."""

from .bundle import (
    BundleIssue,
    BundleVerificationReport,
    VmcBundle,
    build_bundle,
    bundle_json,
    load_bundle,
    verify_bundle,
)
from .canonical import (
    allele_form,
    genotype_form,
    haplotype_form,
    interval_form,
    list_form,
    location_form,
)
from .config import DEFAULT_SETTINGS, VMC_NAMESPACE, IdentifierSettings
from .digest import decode_digest, digest, sha512t24u
from .errors import (
    BundleError,
    DigestUnavailableError,
    IdentifierFormatError,
    UnsupportedEntityError,
    VmcError,
)
from .ids import derive_identifier, identifier_for, split_identifier
from .models import Allele, Completeness, Genotype, Haplotype, Identifier, Interval, Location, Meta

__all__ = [
    "Identifier",
    "Interval",
    "Location",
    "Allele",
    "Completeness",
    "Haplotype",
    "Genotype",
    "Meta",
    "VmcBundle",
    "BundleIssue",
    "BundleVerificationReport",
    "build_bundle",
    "bundle_json",
    "load_bundle",
    "verify_bundle",
    "interval_form",
    "location_form",
    "allele_form",
    "haplotype_form",
    "genotype_form",
    "list_form",
    "digest",
    "decode_digest",
    "sha512t24u",
    "derive_identifier",
    "identifier_for",
    "split_identifier",
    "IdentifierSettings",
    "DEFAULT_SETTINGS",
    "VMC_NAMESPACE",
    "VmcError",
    "BundleError",
    "DigestUnavailableError",
    "IdentifierFormatError",
    "UnsupportedEntityError",
]
