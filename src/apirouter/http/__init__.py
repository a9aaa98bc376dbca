"""HTTP data carriers — Request snapshot, Response builder, header and query mappings."""
