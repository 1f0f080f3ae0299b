from whoa.data import Model, RelationshipTypes, Types


class Comment(Model):
    TABLE_NAME = "comments"
    FIELD_ID = "id_comment"
    FIELD_ID_POST = "id_post"
    FIELD_ID_USER = "id_user"
    FIELD_TEXT = "text"

    REL_POST = "post"
    REL_USER = "user"

    @classmethod
    def get_attribute_types(cls):
        return {
            cls.FIELD_ID: Types.INTEGER,
            cls.FIELD_ID_POST: Types.INTEGER,
            cls.FIELD_ID_USER: Types.INTEGER,
            cls.FIELD_TEXT: Types.TEXT,
        }

    @classmethod
    def get_relationships(cls):
        from .post import Post
        from .user import User

        return {
            RelationshipTypes.BELONGS_TO: {
                cls.REL_POST: (Post, cls.FIELD_ID_POST, Post.REL_COMMENTS),
                cls.REL_USER: (User, cls.FIELD_ID_USER, User.REL_COMMENTS),
            },
        }
