from setuptools import setup, find_packages

setup(
    name="price-monitoring-portal",
    version="0.1.0",
    packages=find_packages(exclude=["*.tests", "*.tests.*"]),
    include_package_data=True,
    package_data={
        "price_portal": ["templates/price_portal/*.html"],
    },
    author="DTI Consumer Protection Division",
    description="DTI Price Monitoring Portal APIs",
    python_requires=">=3.10",
    extras_require={
        "dev": [
            "Werkzeug",
            "pipdeptree",
            "django_extensions",
        ],
        "test": [
            "factory_boy>=3.3.0",
            "mockito>=1.5.0",
            "pytest",
            "pytest-django",
        ],
    },
    install_requires=[
        "Django>=4.2,<6",
        "django-environ>=0.11.2",
        "django-cors-headers>=4.3.1",
        "djangorestframework>=3.15.1",
        "drf-nested-routers>=0.94.1",
        "drf-yasg>=1.21.7",
        "pymysql>=1.1.0",
        "python-dateutil>=2.8.2",
        "pandas>=2.1.0",
        "numpy>=1.26.0",
        "openpyxl>=3.1.2",
        "python-docx>=1.1.0",
        "weasyprint>=61.0",
    ],
)
