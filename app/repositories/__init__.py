"""Repository package — Database query layer.

Each repository extends BaseRepository for generic reads, inserts and the
versioned conditional update, and adds the queries of its entity.
"""
