# -*- coding: utf-8 -*-
"""base Django settings for price portal

Refer Django settings documentation
https://docs.djangoproject.com/en/4.2/ref/settings/

Usage:
- base settings are setup for local quick start convenience
- extend and overwrite this base settings
- e.g. see local.py or it.py

WARNING:
- DO NOT USE BASE SETTINGS FOR PRODUCTION
"""
import os
import uuid

from corsheaders.defaults import default_headers

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', str(uuid.uuid4()))

DEBUG = os.getenv('DJANGO_DEBUG', True)

ALLOWED_HOSTS = ['*']

INSTALLED_APPS = [
    'corsheaders',
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'django.contrib.humanize',
    'rest_framework',
    'drf_yasg',
    'price_portal',
    'price_processors',
    'utils',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'price_portal.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'price_portal.wsgi.application'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.path.join(BASE_DIR, 'db.sqlite3'),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

MYSQL_CLIENT_MAX_ALLOWED_PACKET = 16 * 1024 * 1024

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'price-portal',
    }
}

AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator',
    },
]

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = True

USE_TZ = True

STATIC_URL = '/static/'

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'console': {
            'format': '%(asctime)s %(name)-12s %(levelname)-8s %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'console',
        },
    },
    'loggers': {
        '': {
            'level': 'INFO',
            'handlers': ['console'],
        },
    },
}

# ---

REST_FRAMEWORK = {
    'DEFAULT_PAGINATION_CLASS': 'rest_framework.pagination.PageNumberPagination',
    'PAGE_SIZE': 25,
    'COERCE_DECIMAL_TO_STRING': False,
}

CORS_ORIGIN_ALLOW_ALL = True

CORS_ALLOW_HEADERS = list(default_headers) + [
    'content-disposition',
]

CORS_EXPOSE_HEADERS = [
    'content-disposition',
]

# --- price monitoring

PRICE_COMPLIANCE_TOLERANCE = float(os.getenv('PRICE_COMPLIANCE_TOLERANCE', '0.10'))

PRICE_IMPORT_DEFAULT_YEAR = os.getenv('PRICE_IMPORT_DEFAULT_YEAR', '2023')

PRICE_ANALYSIS_CACHE_SECONDS = int(os.getenv('PRICE_ANALYSIS_CACHE_SECONDS', '300'))

PRICE_OFFICE_NAME = os.getenv('PRICE_OFFICE_NAME', 'DTI Lanao Del Norte Provincial Office')

PRICE_OFFICE_DIVISION = os.getenv('PRICE_OFFICE_DIVISION', 'Consumer Protection Division')

PRICE_OFFICE_EMAIL = os.getenv('PRICE_OFFICE_EMAIL', 'r10.lanaodelnorte@dti.gov.ph')
