import io
import logging

import pytest

import yapbsp
from yapbsp.errors import BSPError, ConvergenceError, GeometryValueError, TreeStructureError
from yapbsp.euclidean.oned import Interval, OrientedPoint, RegionBSPTree1D
from yapbsp.logging_config import setup_logging
from yapbsp.partition import RegionLocation


class TestErrors:

    def test_hierarchy(self):
        assert issubclass(TreeStructureError, BSPError)
        assert issubclass(GeometryValueError, BSPError)
        assert issubclass(GeometryValueError, ValueError)
        assert issubclass(ConvergenceError, BSPError)

    def test_details(self):
        err = ConvergenceError('no root', iterations=40, details={'epsilon': 1e-12})
        assert err.iterations == 40
        assert err.details == {'epsilon': 1e-12}
        assert str(err) == 'no root'
        assert TreeStructureError('bad').details == {}

    def test_value_error_compatible(self):
        with pytest.raises(ValueError):
            Interval.of(float('nan'), 1.0)


class TestLogging:

    @pytest.fixture
    def reset(self):
        logger = logging.getLogger('yapbsp')
        handlers = list(logger.handlers)
        level = logger.level
        yield logger
        logger.handlers = handlers
        logger.setLevel(level)

    def test_setup_replaces_handler(self, reset):
        setup_logging(logging.DEBUG, io.StringIO())
        logger = setup_logging(logging.DEBUG, io.StringIO())
        ours = [h for h in logger.handlers if getattr(h, '_yapbsp_console', False)]
        assert len(ours) == 1
        assert logger.level == logging.DEBUG

    def test_debug_trail(self, reset):
        stream = io.StringIO()
        setup_logging(logging.DEBUG, stream)
        tree = RegionBSPTree1D()
        tree.add(Interval.of(0, 1))
        tree.split(OrientedPoint.create_positive_facing(0.5))
        text = stream.getvalue()
        assert 'yapbsp.bsp.tree' in text
        assert 'merged trees' in text
        assert 'split RegionBSPTree1D' in text

    def test_rejected_cut_is_logged(self, reset, caplog):
        tree = RegionBSPTree1D.full()
        tree.root.cut(OrientedPoint.create_positive_facing(0.0))
        with caplog.at_level(logging.DEBUG, logger='yapbsp'):
            assert not tree.root.plus.cut(OrientedPoint.create_positive_facing(-1.0))
        assert 'does not intersect' in caplog.text
        assert tree.root.plus.attribute == RegionLocation.OUTSIDE


def test_package_exports():
    assert yapbsp.RegionLocation is RegionLocation
    assert isinstance(yapbsp.__version__, str)
