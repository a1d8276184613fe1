"""
FairMint Configuration Tests
"""

import logging

import pytest

from fairmint.collection import Collection
from fairmint.config import CollectionConfig, LogConfig, setup_logging
from fairmint.constants import WEI_PER_ETHER
from fairmint.errors import InvalidConfiguration


class TestCollectionConfig:
    """Tests for CollectionConfig."""

    def test_default_valid(self):
        """Test default configuration validates."""
        assert CollectionConfig().validate() == []

    def test_default_example(self):
        """Test the reference configuration."""
        config = CollectionConfig.default_example()
        assert config.validate() == []
        assert config.limit == 100
        assert config.max_quantity == 6
        assert config.owner_limit == 5
        assert config.price == 88 * WEI_PER_ETHER // 1000
        assert config.batch_count == 10

    def test_batch_count(self):
        """Test N = limit / batch_size."""
        assert CollectionConfig(limit=60, batch_size=20, owner_limit=0).batch_count == 3

    @pytest.mark.parametrize("kwargs", [
        {"limit": 0},
        {"batch_size": 0},
        {"limit": 100, "batch_size": 7},
        {"max_quantity": -1},
        {"owner_limit": -1},
        {"owner_limit": 101},
        {"price": -1},
    ])
    def test_invalid(self, kwargs):
        """Test each invalid field is reported."""
        assert CollectionConfig(**kwargs).validate()

    def test_multiple_errors(self):
        """Test every problem is listed, not just the first."""
        errors = CollectionConfig(limit=100, batch_size=7, price=-1).validate()
        assert len(errors) == 2

    def test_save_load(self, tmp_path):
        """Test JSON round trip."""
        config = CollectionConfig.default_example()
        path = tmp_path / "collection.json"

        config.save(str(path))
        loaded = CollectionConfig.load(str(path))

        assert loaded == config

    def test_copy_independent(self):
        """Test copy does not share state."""
        config = CollectionConfig()
        clone = config.copy()
        clone.limit = 50
        assert config.limit == 100


class TestCollectionDeployment:
    """Tests for constructing a collection."""

    def test_rejects_invalid(self, collection_address, operator):
        """Test an invalid configuration is refused at deployment."""
        with pytest.raises(InvalidConfiguration):
            Collection(collection_address, CollectionConfig(limit=100, batch_size=3), operator)

    def test_config_not_shared(self, collection_address, config, operator):
        """Test later edits to the passed config do not reach the collection."""
        collection = Collection(collection_address, config, operator)
        config.limit = 10
        assert collection.limit == 100

    def test_deploy_random_address(self, config, operator):
        """Test deploy picks distinct addresses."""
        a = Collection.deploy(config, operator)
        b = Collection.deploy(config, operator)
        assert a.address != b.address

    def test_initial_principals(self, collection_address, config, operator, alice):
        """Test guardian defaults to operator and signer starts as operator."""
        collection = Collection(collection_address, config, operator)
        assert collection.guardian == operator
        assert collection.allowlist_signer == operator

        guarded = Collection(collection_address, config, operator, guardian=alice)
        assert guarded.guardian == alice


class TestLogging:
    """Tests for setup_logging."""

    def test_file_handler(self, tmp_path):
        """Test a log file is attached when configured."""
        path = tmp_path / "fairmint.log"
        root = logging.getLogger()
        saved, level = root.handlers[:], root.level
        try:
            root.handlers = []
            setup_logging(LogConfig(level="DEBUG", file=str(path)))
            logging.getLogger("fairmint.test").debug("hello")
            for handler in root.handlers:
                handler.flush()
            assert "hello" in path.read_text()
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers = saved
            root.setLevel(level)
