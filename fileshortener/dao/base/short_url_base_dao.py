"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism (a local JSON file today).

Responsibilities:
    - Provide an interface for creating, reading, updating and deleting ShortURLModel objects.
    - Standardize error handling across multiple data store implementations.
    - Enforce a consistent API for use by request handlers.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from fileshortener.models import ShortURLModel
        >>> from fileshortener.dao.file import ShortURLFileDAO

        >>> dao = ShortURLFileDAO(data_dir='data')

        >>> short_url = ShortURLModel(
        ...     shortcode="a1b2c3",
        ...     target="https://example.com/blog/article-123",
        ... )
        >>> dao.insert(short_url).created_at
        datetime.datetime(2025, 10, 15, 12, 0, tzinfo=datetime.timezone.utc)

        >>> dao.get("a1b2c3").target
        'https://example.com/blog/article-123'

        >>> dao.delete("a1b2c3")
"""

from abc import ABC, abstractmethod

from fileshortener.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLModel:
            Insert a new ShortURLModel into the data store.
            Raises ValidationError if the shortcode or target is empty.
            Raises ShortURLAlreadyExistsError if the short code already exists.
            Raises DataStoreError on write failure.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a ShortURLModel from the data store by short code.
            Raises ShortURLNotFoundError if the entry does not exist.

        all(**kwargs) -> list[ShortURLModel]:
            Retrieve every ShortURLModel. Order is unspecified.

        update(short_url: ShortURLModel, **kwargs) -> ShortURLModel:
            Overwrite target and remark of an existing ShortURLModel.
            Raises ShortURLNotFoundError if the entry does not exist.
            Raises DataStoreError on write failure.

        delete(shortcode: str, **kwargs) -> None:
            Remove a ShortURLModel from the data store.
            Raises ShortURLNotFoundError if the entry does not exist.
            Raises DataStoreError on write failure.

        count(**kwargs) -> int:
            Return the number of stored ShortURLModel objects.

    Subclassing:
        Datastore-specific implementations (e.g., ShortURLFileDAO) must extend
        this class and implement all abstract methods.
    """

    @abstractmethod
    def insert(self, short_url: ShortURLModel, **kwargs) -> ShortURLModel:
        """Insert a new ShortURLModel into the data store.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be inserted. `created_at` is ignored
                and stamped by the data store.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel: the stored model, including its creation time.

        Raises:
            ValidationError:
                If the shortcode or the target URL is empty.

            ShortURLAlreadyExistsError:
                If a ShortURLModel with the same short code already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a ShortURLModel from the data store by its short code.

        Args:
            shortcode (str):
                The short code of the ShortURLModel to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel: The ShortURLModel instance.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given short code exists.
        """
        pass

    @abstractmethod
    def all(self, **kwargs) -> list[ShortURLModel]:
        """Retrieve a snapshot of every ShortURLModel in the data store.

        NOTE: the order of the returned list is not part of the contract.

        Returns:
            list[ShortURLModel]: all stored models.
        """
        pass

    @abstractmethod
    def update(self, short_url: ShortURLModel, **kwargs) -> ShortURLModel:
        """Overwrite target and remark of an existing ShortURLModel.

        The creation time of the stored model is preserved.

        Args:
            short_url (ShortURLModel):
                Model carrying the shortcode to update and its new target/remark.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel: the stored model after the update.

        Raises:
            ValidationError:
                If the target URL is empty.

            ShortURLNotFoundError:
                If no ShortURLModel with the given short code exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, shortcode: str, **kwargs) -> None:
        """Remove a ShortURLModel from the data store.

        Args:
            shortcode (str):
                The short code of the ShortURLModel to be removed.

            **kwargs:
                Additional keyword arguments, used by data store.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given short code exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def count(self, **kwargs) -> int:
        """Return the number of ShortURLModel objects in the data store."""
        pass
