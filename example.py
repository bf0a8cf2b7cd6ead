from cnb_rates import Currency, ExchangeRateProvider, ProviderConfig, __version__

print(__version__)  # 0.1.0

# Default usage: CNB daily XML, cached for one hour
provider = ExchangeRateProvider()

rates = provider.get_exchange_rates([Currency("USD"), Currency("EUR"), Currency("JPY")])
for rate in rates:
    print(rate)
# => CZK/EUR=24.480, CZK/JPY=0.1496, CZK/USD=22.222 ...

# Served from the cache; no second download
print(provider.get_exchange_rates(["GBP"]))

# Inspect how the result was obtained
result = provider.lookup(["USD", "XYZ"])
print(result.from_cache, result.published_on, result.failure)

# Pipe-delimited text feed with a shorter cache window
with ExchangeRateProvider(
    ProviderConfig.from_env(
        {
            "CNB_RATES_URL": "https://www.cnb.cz/cs/financni_trhy/devizovy_trh/kurzy_devizoveho_trhu/denni_kurz.txt",
            "CNB_RATES_CACHE_TTL_SECONDS": "600",
        }
    )
) as text_provider:
    print(text_provider.get_exchange_rates(["USD"]))

provider.close()
