"""Tests for logging module."""
import logging

from accountpy.core.logging import get_logger, mask_token


class TestGetLogger:
    
    def test_returns_named_logger(self):
        logger = get_logger('accountpy.test')
        
        assert logger.name == 'accountpy.test'
        assert logger.propagate
    
    def test_same_logger_for_same_name(self):
        assert get_logger('accountpy.test') is logging.getLogger('accountpy.test')


class TestMaskToken:
    
    def test_long_token(self):
        assert mask_token('abcdef123456') == 'abcd…'
    
    def test_short_token(self):
        assert mask_token('abc') == '***'
    
    def test_empty_token(self):
        assert mask_token('') == '<none>'


class TestSetupLogging:
    
    def test_sets_level_on_package_loggers(self):
        from accountpy import setup_logging
        
        setup_logging(logging.DEBUG)
        try:
            for name in ('accountpy', 'accountpy.api', 'accountpy.account', 'accountpy.cli'):
                assert logging.getLogger(name).level == logging.DEBUG
        finally:
            setup_logging(logging.WARNING)
