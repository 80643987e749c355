"""
Service layer.

Each service encapsulates the storage queries and rules for one
collection.  API handlers only translate service results into HTTP
responses.
"""
