"""
InfluxDB adapter for hive measurement data access.
This implements the MeasurementRepository port using InfluxDB.
"""

from typing import List, Optional, Dict, Any
from datetime import datetime, timedelta, timezone
import logging
from collections import defaultdict

from influxdb_client import InfluxDBClient, Point
from influxdb_client.client.query_api import QueryApi
from influxdb_client.client.write_api import WriteApi, SYNCHRONOUS

from ...core.ports.measurement_repository import MeasurementRepository
from ...core.ports.exceptions import RepositoryError
from ...core.domain.measurement import Measurement


MEASUREMENT_FIELDS = ("weight", "temperature", "humidity")
# range(stop:) excludes its bound; one microsecond keeps a reading stamped at end_time
FLUX_STOP_PADDING = timedelta(microseconds=1)


class InfluxMeasurementRepository(MeasurementRepository):
    """
    InfluxDB adapter that implements the MeasurementRepository port.
    Readings are stored in one measurement, tagged by hive_id, one field per sensor.
    """

    def __init__(self, url: str, token: str, bucket: str, org: str):
        """
        Initialize the InfluxDB repository.

        Args:
            url: InfluxDB server URL (e.g., 'http://localhost:8086')
            token: InfluxDB authentication token
            bucket: Bucket name for data storage
            org: Organization name
        """
        self.url = url
        self.token = token
        self.bucket = bucket
        self.org = org
        self.measurement_name = "hive_sensors"
        self.logger = logging.getLogger(__name__)

        # Initialize client and APIs
        self.client = InfluxDBClient(url=url, token=token, org=org)
        self.query_api: QueryApi = self.client.query_api()
        self.write_api: WriteApi = self.client.write_api(write_options=SYNCHRONOUS)

    async def get_measurements(
        self,
        hive_id: str,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        limit: Optional[int] = None
    ) -> List[Measurement]:
        """
        Fetch the measurements of a hive from InfluxDB, oldest first.

        Raises:
            RepositoryError: If data access fails
        """
        try:
            flux_query = self._build_flux_query(
                hive_id=hive_id,
                start_time=start_time,
                end_time=end_time,
                limit=limit
            )

            self.logger.debug(f"Executing Flux query: {flux_query}")
            result = self.query_api.query(flux_query)
            measurements = self._process_query_results(result)

            self.logger.info(f"Fetched {len(measurements)} measurements for hive {hive_id}")
            return measurements

        except Exception as e:
            self.logger.error(f"Error fetching measurements from InfluxDB: {e}")
            raise RepositoryError(f"Failed to fetch measurements for hive {hive_id}", e)

    async def get_latest_measurement(self, hive_id: str) -> Optional[Measurement]:
        """Get the most recent measurement of a hive."""
        try:
            flux_query = self._build_latest_measurement_query(hive_id)
            result = self.query_api.query(flux_query)
            measurements = self._process_query_results(result)

            if not measurements:
                self.logger.info(f"No measurements found for hive {hive_id}")
                return None

            return self._merge_latest(measurements)

        except Exception as e:
            self.logger.error(f"Error fetching latest measurement for hive {hive_id}: {e}")
            raise RepositoryError(f"Failed to fetch latest measurement for hive {hive_id}", e)

    async def write_measurement(self, measurement: Measurement) -> None:
        """Write one reading as a point with one field per reporting sensor."""
        point = Point(self.measurement_name).tag("hive_id", measurement.hive_id)
        for field in MEASUREMENT_FIELDS:
            value = getattr(measurement, field)
            if value is not None:
                point = point.field(field, float(value))
        point = point.time(self._to_utc(measurement.timestamp))

        try:
            self.write_api.write(bucket=self.bucket, org=self.org, record=point)
        except Exception as e:
            self.logger.error(f"Error writing measurement for hive {measurement.hive_id}: {e}")
            raise RepositoryError(f"Failed to write measurement for hive {measurement.hive_id}", e)

    async def health_check(self) -> bool:
        """
        Check if the InfluxDB connection is available and healthy.

        Returns:
            True if healthy, False otherwise
        """
        try:
            health_query = f'''
                from(bucket: "{self.bucket}")
                |> range(start: -1m)
                |> limit(n: 1)
            '''
            self.query_api.query(health_query)
            return True

        except Exception as e:
            self.logger.warning(f"InfluxDB health check failed: {e}")
            return False

    def close(self):
        """Close the InfluxDB client connection."""
        if self.client:
            self.client.close()
            self.logger.info("InfluxDB client connection closed")

    def _build_flux_query(
        self,
        hive_id: str,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        limit: Optional[int] = None
    ) -> str:
        """Build a Flux query string based on the provided parameters."""
        query_parts = [f'from(bucket: "{self.bucket}")']

        time_range = "|> range(start: -365d)"
        if start_time:
            if end_time:
                time_range = (
                    f'|> range(start: {self._format_datetime_for_flux(start_time)}, '
                    f'stop: {self._format_stop_for_flux(end_time)})'
                )
            else:
                time_range = f'|> range(start: {self._format_datetime_for_flux(start_time)})'
        elif end_time:
            time_range = f'|> range(start: -365d, stop: {self._format_stop_for_flux(end_time)})'
        query_parts.append(time_range)

        query_parts.append(f'|> filter(fn: (r) => r["_measurement"] == "{self.measurement_name}")')
        query_parts.append(f'|> filter(fn: (r) => r["hive_id"] == "{hive_id}")')
        query_parts.append('|> sort(columns: ["_time"])')

        if limit:
            query_parts.append(f'|> limit(n: {limit})')

        return " ".join(query_parts)

    def _build_latest_measurement_query(self, hive_id: str) -> str:
        """Build a Flux query for the newest value of every field of a hive."""
        return " ".join([
            f'from(bucket: "{self.bucket}")',
            '|> range(start: 0)',
            f'|> filter(fn: (r) => r["_measurement"] == "{self.measurement_name}")',
            f'|> filter(fn: (r) => r["hive_id"] == "{hive_id}")',
            '|> last()'
        ])

    def _process_query_results(self, result) -> List[Measurement]:
        """
        Group InfluxDB field records into Measurement domain objects.

        Records sharing hive and time become one measurement. Readings that
        fail domain validation are skipped with a warning.
        """
        measurement_groups: Dict[str, Dict[str, Any]] = defaultdict(dict)

        for table in result:
            for record in table.records:
                hive_id = record.values.get("hive_id", "")
                timestamp = record.get_time()

                if not hive_id or not timestamp:
                    continue

                field = record.get_field()
                value = record.get_value()
                if field not in MEASUREMENT_FIELDS or value is None:
                    continue

                key = f"{hive_id}_{timestamp.isoformat()}"
                if key not in measurement_groups:
                    measurement_groups[key] = {
                        "hive_id": hive_id,
                        "timestamp": timestamp,
                        "fields": {}
                    }
                measurement_groups[key]["fields"][field] = float(value)

        measurements = []
        for group_data in measurement_groups.values():
            try:
                measurements.append(
                    Measurement(
                        hive_id=group_data["hive_id"],
                        timestamp=group_data["timestamp"],
                        weight=group_data["fields"].get("weight"),
                        temperature=group_data["fields"].get("temperature"),
                        humidity=group_data["fields"].get("humidity")
                    )
                )
            except ValueError as e:
                self.logger.warning(
                    f"Skipping invalid reading of hive {group_data['hive_id']} "
                    f"at {group_data['timestamp']}: {e}"
                )

        measurements.sort(key=lambda m: m.timestamp)
        return measurements

    @staticmethod
    def _merge_latest(measurements: List[Measurement]) -> Measurement:
        """
        Combine the per-field results of `last()` into one reading.

        Each field keeps its newest reported value; the reading is stamped
        with the newest timestamp. Expects measurements sorted oldest first.
        """
        newest = measurements[-1]
        values = {field: None for field in MEASUREMENT_FIELDS}
        for measurement in measurements:
            for field in MEASUREMENT_FIELDS:
                value = getattr(measurement, field)
                if value is not None:
                    values[field] = value

        return Measurement(hive_id=newest.hive_id, timestamp=newest.timestamp, **values)

    @staticmethod
    def _to_utc(dt: datetime) -> datetime:
        if dt.tzinfo is None:
            # Assume naive datetime is in UTC
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    def _format_datetime_for_flux(self, dt: datetime) -> str:
        """
        Format a datetime object for use in InfluxDB Flux queries.

        Returns:
            String in RFC3339 format for Flux queries
        """
        return self._to_utc(dt).isoformat().replace('+00:00', 'Z')

    def _format_stop_for_flux(self, dt: datetime) -> str:
        """Format an inclusive end time as a Flux `stop`, which is exclusive."""
        return self._format_datetime_for_flux(dt + FLUX_STOP_PADDING)
