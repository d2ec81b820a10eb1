"""LabTrend: blood-test evolution charts with reference-range flags."""
