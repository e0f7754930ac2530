"""
UI-independent page controllers.
"""

from .base import (
    Controller,
    DetailController,
    ImageField,
    ListController,
    PageStatus,
    ViewState,
)
from .catalog import (
    BannerFormController,
    BannerListController,
    CategoryFormController,
    CategoryListController,
    CuttingMethodFormController,
    CuttingMethodListController,
    ProductFormController,
    ProductListController,
)
from .forms import FormController
from .insights import DashboardController, ReportsController, SearchController
from .orders import CustomerListController, OrderDetailController, OrderListController
from .session import LoginController
from .settings import SettingsController

__all__ = [
    'Controller', 'DetailController', 'ImageField', 'ListController', 'PageStatus', 'ViewState',
    'FormController',
    'ProductListController', 'ProductFormController',
    'CategoryListController', 'CategoryFormController',
    'CuttingMethodListController', 'CuttingMethodFormController',
    'BannerListController', 'BannerFormController',
    'OrderListController', 'OrderDetailController', 'CustomerListController',
    'DashboardController', 'ReportsController', 'SearchController',
    'LoginController', 'SettingsController',
]
