"""Sample pages and helpers for building PageData without a browser."""

from analyzer.crawler.robots_ai import evaluate_robots_access
from analyzer.extraction.page_data import PageData, extract_page_data

ARTICLE_URL = "https://example.com/blog/espresso-grinders"
PRODUCT_URL = "https://shop.example.com/product/aero-grinder"

ARTICLE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Best Espresso Grinders Tested: 2025 Buying Guide</title>
  <meta name="description" content="We tested 12 espresso grinders over 6 months. Compare grind consistency, retention and noise, with measured results and clear picks for every budget.">
  <meta name="author" content="Dana Reyes">
  <meta property="article:published_time" content="2025-05-20T09:00:00Z">
  <meta property="og:title" content="Best Espresso Grinders Tested">
  <meta property="og:description" content="Measured results for 12 grinders">
  <meta property="og:image" content="https://example.com/img/grinders.jpg">
  <meta name="twitter:card" content="summary_large_image">
  <link rel="canonical" href="https://example.com/blog/espresso-grinders">
  <script type="application/ld+json">
  {
    "@context": "https://schema.org",
    "@type": "Article",
    "headline": "Best Espresso Grinders Tested",
    "datePublished": "2025-05-20",
    "author": {"@type": "Person", "name": "Dana Reyes", "url": "https://example.com/about/dana"},
    "publisher": {
      "@type": "Organization",
      "name": "Example Coffee Lab",
      "sameAs": ["https://www.wikidata.org/wiki/Q123", "https://www.linkedin.com/company/example"]
    }
  }
  </script>
  <script type="application/ld+json">
  {
    "@context": "https://schema.org",
    "@type": "FAQPage",
    "mainEntity": [
      {
        "@type": "Question",
        "name": "What is a burr grinder?",
        "acceptedAnswer": {"@type": "Answer", "text": "A burr grinder crushes beans between two abrasive surfaces for an even grind."}
      }
    ]
  }
  </script>
</head>
<body>
  <header><nav><a href="/">Home</a> <a href="/blog/">Blog</a></nav></header>
  <main>
    <article>
      <h1>Best Espresso Grinders Tested</h1>
      <p class="byline">By Dana Reyes, <time datetime="2025-05-20">May 20, 2025</time></p>
      <p>An espresso grinder is the single biggest upgrade for home espresso, and our testing shows consistency matters more than burr size.</p>
      <p>We tested 12 grinders over 6 months and measured particle spread with a laser diffraction analyzer at 18 grams per dose.</p>
      <h2>What makes a good espresso grinder?</h2>
      <p>A good grinder is one that delivers 95% of particles within a 200 micron window, according to Barista Hustle research on extraction.</p>
      <ul>
        <li>Grind consistency under 200 microns</li>
        <li>Retention below 0.5 g</li>
        <li>Stepless adjustment</li>
        <li>Noise below 70 dB</li>
      </ul>
      <h2>How did we test them?</h2>
      <p>Our methodology used 3 repeat shots per setting, and the Aero grinder was 2x faster than the average competitor.</p>
      <table>
        <tr><th>Grinder</th><th>Retention</th><th>Price</th></tr>
        <tr><td>Aero</td><td>0.2 g</td><td>$349</td></tr>
        <tr><td>Bolt</td><td>0.8 g</td><td>$299</td></tr>
      </table>
      <img src="/img/aero.jpg" alt="Aero grinder on a counter" width="800" height="600">
      <img src="/img/bolt.jpg" alt="Bolt grinder burrs" width="800" height="600" loading="lazy">
      <h2>Frequently asked questions</h2>
      <div class="faq">
        <h3>How often should I clean my grinder?</h3>
        <p>Clean the burrs every 2 weeks if you grind daily, according to Coffee Science guidance.</p>
      </div>
      <p>Read more in <a href="/blog/espresso-basics">our espresso basics guide</a> or the <a href="https://www.sca.coffee/research">SCA research library</a>.</p>
    </article>
  </main>
  <footer><a href="/privacy">Privacy</a> <a href="/terms">Terms</a> <a href="/contact">Contact us</a></footer>
</body>
</html>
"""

PRODUCT_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Aero Espresso Grinder | Example Shop</title>
  <meta name="description" content="The Aero espresso grinder with 64 mm flat burrs, stepless adjustment and under 0.2 g retention. Free shipping and 30-day returns on every order.">
  <link rel="canonical" href="https://shop.example.com/product/aero-grinder">
  <script type="application/ld+json">
  {
    "@context": "https://schema.org",
    "@type": "Product",
    "name": "Aero Espresso Grinder",
    "description": "A 64 mm flat burr espresso grinder with stepless adjustment and near-zero retention.",
    "sku": "AERO-64",
    "gtin13": "0123456789012",
    "brand": {"@type": "Brand", "name": "Aero"},
    "aggregateRating": {"@type": "AggregateRating", "ratingValue": "4.7", "reviewCount": "128"},
    "offers": {
      "@type": "Offer",
      "price": "349.00",
      "priceCurrency": "USD",
      "availability": "https://schema.org/InStock"
    }
  }
  </script>
</head>
<body>
  <nav class="breadcrumb"><a href="/">Home</a> <a href="/collections/grinders">Grinders</a></nav>
  <main>
    <h1 class="product-title">Aero Espresso Grinder</h1>
    <img class="product-image" src="/img/aero-front.jpg" alt="Aero grinder front view" width="1000" height="1000">
    <span class="product-price" data-price="349.00">$349.00</span>
    <select name="color"><option>Black</option><option>White</option></select>
    <button class="add-to-cart">Add to cart</button>
    <p>In stock and ready to ship. Free shipping on orders over $50 and 30-day returns.</p>
    <p>The Aero uses 64 mm flat burrs and retains less than 0.2 g of coffee between doses.</p>
  </main>
  <footer><a href="/policies/shipping">Shipping</a> <a href="/policies/returns">Returns</a> <a href="/privacy">Privacy</a></footer>
</body>
</html>
"""

BARE_HTML = "<html><body><p>Hello.</p></body></html>"


def make_page(
    markup: str,
    url: str = ARTICLE_URL,
    *,
    robots_txt: str | None = None,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
    load_time_ms: int = 800,
) -> PageData:
    """PageData for ``markup`` as if fetched from ``url`` with the given robots.txt."""
    return extract_page_data(
        markup,
        url,
        status_code=status_code,
        load_time_ms=load_time_ms,
        headers=headers,
        robots_access=evaluate_robots_access(robots_txt, url),
    )


def article_page(**kwargs) -> PageData:
    return make_page(ARTICLE_HTML, ARTICLE_URL, **kwargs)


def product_page(**kwargs) -> PageData:
    return make_page(PRODUCT_HTML, PRODUCT_URL, **kwargs)
