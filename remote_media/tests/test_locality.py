"""Tests for remote_media.core.locality — the is_local flag."""

from remote_media.core.locality import LOCAL_MEDIA_META_KEY, LocalityClassifier


class TestIsLocal:
    def test_none_is_remote(self, attachment_store) -> None:
        assert LocalityClassifier(attachment_store).is_local(None) is False

    def test_unflagged_is_remote(self, attachment_store) -> None:
        attachment_id = attachment_store.add_attachment("/uploads/a.jpg")
        assert LocalityClassifier(attachment_store).is_local(attachment_id) is False

    def test_flagged_is_local(self, attachment_store) -> None:
        attachment_id = attachment_store.add_attachment("/uploads/a.jpg")
        attachment_store.set_meta(attachment_id, LOCAL_MEDIA_META_KEY, True)
        assert LocalityClassifier(attachment_store).is_local(attachment_id) is True

    def test_truthy_legacy_value_is_local(self, attachment_store) -> None:
        attachment_store.set_meta(7, LOCAL_MEDIA_META_KEY, 1)
        assert LocalityClassifier(attachment_store).is_local(7) is True

    def test_falsy_value_is_remote(self, attachment_store) -> None:
        attachment_store.set_meta(7, LOCAL_MEDIA_META_KEY, 0)
        assert LocalityClassifier(attachment_store).is_local(7) is False

    def test_other_meta_keys_ignored(self, attachment_store) -> None:
        attachment_store.set_meta(7, "some_other_flag", True)
        assert LocalityClassifier(attachment_store).is_local(7) is False


class TestMarkLocal:
    def test_default_meta_key(self) -> None:
        assert LOCAL_MEDIA_META_KEY == "remest_local_media"

    def test_mark_local_sets_flag(self, attachment_store) -> None:
        classifier = LocalityClassifier(attachment_store)
        attachment_id = attachment_store.add_attachment("/uploads/a.jpg")
        classifier.mark_local(attachment_id)
        assert attachment_store.get_meta(attachment_id, LOCAL_MEDIA_META_KEY) is True
        assert classifier.is_local(attachment_id) is True

    def test_mark_local_is_idempotent(self, attachment_store) -> None:
        classifier = LocalityClassifier(attachment_store)
        classifier.mark_local(3)
        classifier.mark_local(3)
        assert classifier.is_local(3) is True

    def test_custom_meta_key(self, attachment_store) -> None:
        classifier = LocalityClassifier(attachment_store, meta_key="staging_local_media")
        classifier.mark_local(5)
        assert attachment_store.get_meta(5, "staging_local_media") is True
        assert attachment_store.get_meta(5, LOCAL_MEDIA_META_KEY) is None

    def test_known_approximation_any_new_attachment_is_local(self, attachment_store) -> None:
        """Every attachment created after activation is marked local, even
        one whose file was copied in from production by another tool. The
        classifier has no way to tell; this pins that behavior."""
        classifier = LocalityClassifier(attachment_store)
        synced_from_production = attachment_store.add_attachment(
            "https://www.example.com/wp-content/uploads/2018/05/imported.jpg"
        )
        classifier.mark_local(synced_from_production)
        assert classifier.is_local(synced_from_production) is True
