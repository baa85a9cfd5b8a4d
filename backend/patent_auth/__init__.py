"""Patent authorization service — certificate issuance against prepaid credits."""
