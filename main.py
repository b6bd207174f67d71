"""Cloud Functions source entry: exposes the ``run_query`` HTTP function."""

from cloudquery.entrypoint import run_query

__all__ = ["run_query"]
