"""
Scoring engine: converts a batch of sources into value-scored,
quadrant-classified sources.

Modules
-------
statistics : median() + nearest-rank percentile() — pure, no I/O.
normalize  : DatasetMaxima + compute_maxima() + fractional normalizers.
scorer     : ValueScoreComponents + value_score_for_source() + composite_score().
classifier : QuadrantThresholds + classify_quadrant().
engine     : compute_dataset_statistics() + compute_enhanced_sources().
ranker     : quadrant_counts() + filter_by_quadrant() + top_n_per_quadrant().
zones      : alternative zone segmentation (compute_zoned_sources()).
"""
