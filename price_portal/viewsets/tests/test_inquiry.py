from django.core.cache import cache
from django.test import TestCase
from django.urls import resolve
from mockito import when, unstub

from price_portal.tests.factories import PriceRecordFactory, NoodlePriceRecordFactory, TestConstant
from price_portal.viewsets.inquiry import InquiryViewSet
from price_portal.viewsets.tests import _logger
from price_processors.services import report_srv


class InquiryViewSetTestCase(TestCase):

    def setUp(self):
        cache.clear()
        self.sardines = PriceRecordFactory()
        self.noodles = NoodlePriceRecordFactory()

    def tearDown(self) -> None:
        unstub()

    def test_list_api(self):
        """
        python manage.py test price_portal.viewsets.tests.test_inquiry.InquiryViewSetTestCase.test_list_api
        """
        response = self.client.get('/api/inquiry/')
        _logger.info(response.data)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['store'], TestConstant.store.value)
        self.assertEqual(response.data[0]['count'], 1)

        response = self.client.get('/api/inquiry/', {'store': TestConstant.store2.value})
        self.assertEqual(response.data, [])

    def test_letter_html_api(self):
        """
        python manage.py test price_portal.viewsets.tests.test_inquiry.InquiryViewSetTestCase.test_letter_html_api
        """
        payload = {'ids': [self.sardines.id], 'date': "2025-04-01", 'officer': "Juan Dela Cruz"}
        response = self.client.post('/api/inquiry/letter/', data=payload, content_type='application/json')

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response['Content-Type'].startswith('text/html'))

        html = response.content.decode('utf-8')
        self.assertIn("April 1, 2025", html)
        self.assertIn("Price Inquiry - Sardines", html)
        self.assertIn("Php 1.50", html)

    def test_letter_pdf_api(self):
        """
        python manage.py test price_portal.viewsets.tests.test_inquiry.InquiryViewSetTestCase.test_letter_pdf_api
        """
        when(report_srv).html_to_pdf(...).thenReturn(b"%PDF-1.7 mock")

        payload = {'ids': [self.sardines.id], 'date': "2025-04-01", 'format': "pdf"}
        response = self.client.post('/api/inquiry/letter', data=payload, content_type='application/json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content, b"%PDF-1.7 mock")
        self.assertEqual(
            response['Content-Disposition'],
            'attachment; filename="Letter_of_Inquiry_SAVEMORE_TAGBILARAN_2025-04-01.pdf"'
        )

    def test_letter_api_errors(self):
        """
        python manage.py test price_portal.viewsets.tests.test_inquiry.InquiryViewSetTestCase.test_letter_api_errors
        """
        response = self.client.post('/api/inquiry/letter/', data={'ids': []}, content_type='application/json')
        self.assertEqual(response.status_code, 400)

        response = self.client.post('/api/inquiry/letter/', data={'ids': [9999]}, content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('No records selected', response.data['errors'])

        response = self.client.post('/api/inquiry/letter/', data={'ids': [self.sardines.id], 'format': "docx"},
                                    content_type='application/json')
        self.assertEqual(response.status_code, 400)

    def test_letter_route(self):
        """
        python manage.py test price_portal.viewsets.tests.test_inquiry.InquiryViewSetTestCase.test_letter_route
        """
        for path in ['/api/inquiry/letter', '/api/inquiry/letter/', '/api/inquiry', '/api/prices']:
            match = resolve(path)
            _logger.info(f"{path} -> {match.url_name}")
            self.assertIsNotNone(match.func)

        self.assertEqual(resolve('/api/inquiry/letter').func.cls, InquiryViewSet)
