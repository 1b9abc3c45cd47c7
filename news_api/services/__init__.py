# Services package.
#
# Each module exposes a focused set of async functions that build and run
# the SQL for a single domain aggregate:
#
#   querying         : existence checks, order/sort/pagination resolution, filters
#   article_service  : list (filtered, sorted, paginated) + CRUD for Article
#   comment_service  : per-article listing + CRUD for Comment
#   topic_service    : list / create for Topic
#   user_service     : list / get / create for User
#
# All service functions accept an AsyncSession as their first argument
# so that the router layer controls the transaction boundary via the
# ``get_db`` dependency.  Failures are raised as ``news_api.errors``
# exceptions, never returned as sentinel values.
