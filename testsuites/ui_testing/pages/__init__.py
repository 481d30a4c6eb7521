"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the journeys under test.

FinChoice (staging):
    - LoginPage: customer login / logout
    - ForgotPasswordPage: cell + ID number password recovery
    - ApplyNowPage: multi-step loan application

Shopify sauce-demo store:
    - RegisterPage: customer account registration

Author: Automation Team
License: MIT
================================================================================
"""

from .login_page import LoginPage
from .forgot_password_page import ForgotPasswordPage
from .apply_now_page import ApplyNowPage
from .register_page import RegisterPage

__all__ = [
    "LoginPage",
    "ForgotPasswordPage",
    "ApplyNowPage",
    "RegisterPage",
]
