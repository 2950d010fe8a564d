"""Text processors: the scanning engine and its rule catalogs."""
