from .core import (
    create_initial_user_doc_for_google as _create_initial_user_doc_for_google,
    create_initial_user_document as _create_initial_user_document,
    get_user_by_id as _get_user_by_id,
    search_users as _search_users,
    set_budget as _set_budget,
    update_user as _update_user,
)
from .deletion import delete_all_user_data as _delete_all_user_data
from .profile import upload_profile_image as _upload_profile_image
from .propagation import (
    update_user_profile_and_propagate as _update_user_profile_and_propagate,
)
from .usernames import (
    get_user_by_username as _get_user_by_username,
    is_username_available as _is_username_available,
    release_username as _release_username,
    set_username_for_new_user as _set_username_for_new_user,
    update_username_and_propagate as _update_username_and_propagate,
)


class UserService:
    """Service class for user-related operations and Firestore interaction."""

    update_user = staticmethod(_update_user)
    get_user_by_id = staticmethod(_get_user_by_id)
    create_initial_user_document = staticmethod(_create_initial_user_document)
    create_initial_user_doc_for_google = staticmethod(
        _create_initial_user_doc_for_google
    )
    set_budget = staticmethod(_set_budget)
    search_users = staticmethod(_search_users)
    is_username_available = staticmethod(_is_username_available)
    set_username_for_new_user = staticmethod(_set_username_for_new_user)
    release_username = staticmethod(_release_username)
    get_user_by_username = staticmethod(_get_user_by_username)
    update_username_and_propagate = staticmethod(_update_username_and_propagate)
    update_user_profile_and_propagate = staticmethod(
        _update_user_profile_and_propagate
    )
    delete_all_user_data = staticmethod(_delete_all_user_data)
    upload_profile_image = staticmethod(_upload_profile_image)
