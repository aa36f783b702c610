from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase

from price_portal.models import PriceRecord
from price_portal.tests.factories import PriceRecordFactory, NoodlePriceRecordFactory, TestConstant
from price_portal.viewsets.tests import _logger

IMPORT_CSV = "\n".join([
    "PRICE MONITORING MARCH 2025,,,,,,",
    "BASIC NECESSITIES,PRODUCT NAME,UNIT,SRP,SAVEMORE,ALTURAS MALL,Remarks",
    "Canned Sardines,,,,,,",
    ",Ligo Sardines in Tomato Sauce,155g,21.00,20.50,#N/A,",
    ",555 Sardines,155g,,19.75,20.00,ok",
]).encode('utf-8')


class PriceRecordViewSetTestCase(TestCase):

    def setUp(self):
        self.sardines = PriceRecordFactory()
        NoodlePriceRecordFactory()

    def test_get_api(self):
        """
        python manage.py test price_portal.viewsets.tests.test_price.PriceRecordViewSetTestCase.test_get_api
        """
        _logger.info('Get price list API')
        response = self.client.get('/api/prices/')
        self.assertEqual(response.status_code, 200, 'Ok status response is expected')

        _logger.info('Check if API return result')
        self.assertEqual(response.data['pagination']['count'], 2)
        commodities = {r['commodity'] for r in response.data['results']}
        self.assertEqual(commodities, {TestConstant.commodity.value, TestConstant.commodity2.value})

        _logger.info('Check keyword filter')
        response = self.client.get('/api/prices/', {'store': "alturas mall"})
        self.assertEqual(len(response.data['results']), 1, 'Single result is expected for keyword')

        _logger.info('Check search')
        response = self.client.get('/api/prices/?search=sardines')
        self.assertEqual(len(response.data['results']), 1)

        _logger.info('Check if wrong parameter')
        response = self.client.get('/api/prices/?municipality=Tagbilaran')
        self.assertEqual(len(response.data['results']), 2, 'Unrecognized query parameter is ignored')

    def test_create_api(self):
        """
        python manage.py test price_portal.viewsets.tests.test_price.PriceRecordViewSetTestCase.test_create_api
        """
        payload = {
            'commodity': "Rice",
            'brand': "Jasmine",
            'store': "GAISANO",
            'price': 45.5,
            'srp': 46,
            'month': "March",
            'years': "2025",
        }
        response = self.client.post('/api/prices/', data=payload, content_type='application/json')
        _logger.info(response.data)

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['price'], 45.5)
        self.assertEqual(PriceRecord.objects.count(), 3)

    def test_create_api_invalid(self):
        """
        python manage.py test price_portal.viewsets.tests.test_price.PriceRecordViewSetTestCase.test_create_api_invalid
        """
        response = self.client.post('/api/prices/', data={'commodity': "Rice", 'price': -1},
                                    content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('price', response.data['errors'])

        response = self.client.post('/api/prices/', data={'commodity': "", 'price': 1},
                                    content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('commodity', response.data['errors'])

    def test_update_and_delete_api(self):
        """
        python manage.py test price_portal.viewsets.tests.test_price.PriceRecordViewSetTestCase.test_update_and_delete_api
        """
        response = self.client.patch(f'/api/prices/{self.sardines.id}/', data={'price': 23},
                                     content_type='application/json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['price'], 23)

        response = self.client.delete(f'/api/prices/{self.sardines.id}/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], "Deleted successfully")
        self.assertFalse(PriceRecord.objects.filter(id=self.sardines.id).exists())

        response = self.client.delete(f'/api/prices/{self.sardines.id}/')
        self.assertEqual(response.status_code, 404)

    def test_unique_api(self):
        """
        python manage.py test price_portal.viewsets.tests.test_price.PriceRecordViewSetTestCase.test_unique_api
        """
        response = self.client.get('/api/prices/unique/?field=store')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['store'], [TestConstant.store2.value, TestConstant.store.value])

        response = self.client.get('/api/prices/unique/')
        self.assertIn('commodity', response.data)

        response = self.client.get('/api/prices/unique/?field=price')
        self.assertEqual(response.status_code, 400)

    def test_export_api(self):
        """
        python manage.py test price_portal.viewsets.tests.test_price.PriceRecordViewSetTestCase.test_export_api
        """
        response = self.client.get('/api/prices/export/?output=csv&commodity=Sardines')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'text/csv')
        self.assertIn('attachment; filename="price_data_', response['Content-Disposition'])

        content = response.content.decode('utf-8').splitlines()
        self.assertEqual(content[0], "Brand,Commodity,Month,Price,Size,Store,Variant,Years")
        self.assertEqual(len(content), 2)

        response = self.client.get('/api/prices/export/?output=xlsx')
        self.assertEqual(response.status_code, 200)

        response = self.client.get('/api/prices/export/?output=pdf')
        self.assertEqual(response.status_code, 400)

    def test_validate_api(self):
        """
        python manage.py test price_portal.viewsets.tests.test_price.PriceRecordViewSetTestCase.test_validate_api
        """
        payload = [
            {'commodity': "rice", 'price': "45", 'store': "gaisano"},
            {'commodity': "rice", 'price': "45", 'store': "gaisano"},
            {'commodity': "rice"},
        ]
        response = self.client.post('/api/prices/validate/', data=payload, content_type='application/json')
        _logger.info(response.data)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['valid_count'], 2)
        self.assertEqual(response.data['invalid_count'], 1)
        self.assertEqual(len(response.data['duplicates']), 1)
        self.assertEqual(response.data['quality']['by_store'], {'GAISANO': 2})

        response = self.client.post('/api/prices/validate/', data={'commodity': "rice"},
                                    content_type='application/json')
        self.assertEqual(response.status_code, 400)

    def test_import_api(self):
        """
        python manage.py test price_portal.viewsets.tests.test_price.PriceRecordViewSetTestCase.test_import_api
        """
        upload = SimpleUploadedFile("march.csv", IMPORT_CSV, content_type="text/csv")
        response = self.client.post('/api/prices/import', data={'file': upload, 'year': "2025"})
        _logger.info(response.data)

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['parsed_count'], 3)
        self.assertEqual(response.data['price_row_new_count'], 3)
        self.assertEqual(PriceRecord.objects.filter(years="2025", month="March").count(), 5)

    def test_import_api_dry_run(self):
        """
        python manage.py test price_portal.viewsets.tests.test_price.PriceRecordViewSetTestCase.test_import_api_dry_run
        """
        upload = SimpleUploadedFile("march.csv", IMPORT_CSV, content_type="text/csv")
        response = self.client.post('/api/prices/import/', data={'file': upload, 'dry_run': True,
                                                                 'category': "PRIME COMMODITIES"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['valid_count'], 3)
        self.assertEqual(response.data['preview'][0]['category'], "prime")
        self.assertEqual(PriceRecord.objects.count(), 2)

    def test_import_api_bad_file(self):
        """
        python manage.py test price_portal.viewsets.tests.test_price.PriceRecordViewSetTestCase.test_import_api_bad_file
        """
        upload = SimpleUploadedFile("march.xls", b"binary", content_type="application/vnd.ms-excel")
        response = self.client.post('/api/prices/import/', data={'file': upload})
        self.assertEqual(response.status_code, 400)
        self.assertIn('errors', response.data)

        upload = SimpleUploadedFile("notes.csv", b"a,b\n1,2", content_type="text/csv")
        response = self.client.post('/api/prices/import/', data={'file': upload})
        self.assertEqual(response.status_code, 400)
