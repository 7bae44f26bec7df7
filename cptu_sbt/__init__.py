"""CPTu soil behaviour type (SBT) charting: normalization and boundary curves."""
