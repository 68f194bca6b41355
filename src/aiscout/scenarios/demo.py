"""Offline text generator returning canned scenario text."""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)

DEMO_MODEL = "demo"

DEMO_SCENARIO_TEXT = """\
Senaryo 1
Başlık: Kullanıcı Girişi - Başarılı Senaryo
Açıklama: Geçerli kullanıcı bilgileri ile giriş yapma işleminin doğrulanması
Adımlar:
1. Ana sayfaya git
2. Email alanına geçerli bir email adresi gir (örn: test@example.com)
3. Şifre alanına geçerli şifreyi gir
4. "Giriş Yap" butonuna tıkla
Beklenen Sonuç: Kullanıcı başarıyla giriş yapar ve dashboard sayfasına yönlendirilir
Öncelik: Kritik
Kategori: Functional Testing

Senaryo 2
Başlık: Ürün Arama İşlevi
Açıklama: Kullanıcının arama özelliğini kullanarak ürün bulabilmesinin testi
Adımlar:
1. Ana sayfada arama kutusunu bul
2. Arama kutusuna "laptop" yaz
3. "Ara" butonuna tıkla veya Enter tuşuna bas
4. Arama sonuçlarının yüklendiğini doğrula
Beklenen Sonuç: Laptop ile ilgili ürünler listelenir ve sonuç sayısı gösterilir
Öncelik: Yüksek
Kategori: Functional Testing

Senaryo 3
Başlık: Şifre Hatırlama İşlevi
Açıklama: Şifresini unutan kullanıcının şifre sıfırlama sürecini test eder
Adımlar:
1. Login sayfasına git
2. "Şifremi Unuttum" linkine tıkla
3. Email adresini gir
4. Şifre sıfırlama linkinin gönderildiğini doğrula
Beklenen Sonuç: Kullanıcıya email ile şifre sıfırlama linki gönderilir ve başarı mesajı gösterilir
Öncelik: Orta
Kategori: Functional Testing

Senaryo 4
Başlık: Sepete Ürün Ekleme
Açıklama: Kullanıcının seçtiği ürünü sepete ekleyebilmesinin testi
Adımlar:
1. Ürün listesinde bir ürün seç
2. "Sepete Ekle" butonuna tıkla
3. Sepet ikonunda ürün sayısının arttığını doğrula
4. Sepete git ve ürünün sepette olduğunu kontrol et
Beklenen Sonuç: Ürün başarıyla sepete eklenir ve sepet sayacı güncellenir
Öncelik: Kritik
Kategori: E-Commerce

Senaryo 5
Başlık: Geçersiz Giriş Denemesi - Negatif Test
Açıklama: Hatalı kullanıcı bilgileri ile giriş denemesinin hata vermesinin testi
Adımlar:
1. Login sayfasına git
2. Email alanına geçersiz email gir (örn: invalid@test)
3. Şifre alanına hatalı şifre gir
4. "Giriş Yap" butonuna tıkla
Beklenen Sonuç: Sistem hata mesajı gösterir: "Geçersiz kullanıcı adı veya şifre"
Öncelik: Yüksek
Kategori: Security Testing
"""


class StaticTextGenerator:
    """TextGenerator that ignores the prompt and returns fixed text."""

    def __init__(self, text: str = DEMO_SCENARIO_TEXT) -> None:
        self._text = text

    async def generate(self, prompt: str) -> str:
        logger.debug("Returning static scenario text", prompt_chars=len(prompt))
        return self._text
