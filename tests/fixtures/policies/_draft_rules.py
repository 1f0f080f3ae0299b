# Files starting with an underscore are not loaded as policies.
RULES = {
    "can_view_posts": lambda context: False,
}
